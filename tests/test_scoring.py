from __future__ import annotations

from typing import List

import pytest

from blockgrid.engine import GameConfig, ScoringEngine


class FakeClock:
    def __init__(self, times: List[float]) -> None:
        self.times = list(times)

    def __call__(self) -> float:
        return self.times.pop(0)


def test_placement_score_is_ten_per_cell() -> None:
    engine = ScoringEngine()
    assert engine.score_placement(4) == 40
    assert engine.score_placement(1) == 10
    assert engine.score == 50


@pytest.mark.parametrize("rows, columns, expected", [(0, 0, 0), (1, 0, 100), (0, 1, 100), (1, 1, 400), (2, 1, 900), (3, 3, 3600)])
def test_clear_score_is_squared(rows: int, columns: int, expected: int) -> None:
    engine = ScoringEngine(clock=FakeClock([0.0]))
    assert engine.score_clear(rows, columns) == expected
    assert engine.score == expected


def test_no_clear_leaves_combo_untouched() -> None:
    engine = ScoringEngine(clock=FakeClock([]))
    assert engine.score_clear(0, 0) == 0
    assert engine.state.last_clear_time is None


def test_combo_tracks_window_but_does_not_change_score() -> None:
    engine = ScoringEngine(GameConfig(), clock=FakeClock([10.0, 10.3, 10.6, 12.0]))
    gained = [engine.score_clear(1, 0) for _ in range(3)]
    assert gained == [100, 100, 100]
    assert engine.combo_count == 2
    assert engine.multiplier() == pytest.approx(2.0)
    assert engine.score_clear(1, 0) == 100
    assert engine.combo_count == 0
    assert engine.multiplier() == pytest.approx(1.0)
    assert engine.score == 400


def test_reset_zeroes_state() -> None:
    engine = ScoringEngine(clock=FakeClock([1.0]))
    engine.score_placement(3)
    engine.score_clear(1, 0)
    engine.reset()
    assert engine.score == 0
    assert engine.combo_count == 0
    assert engine.state.last_clear_time is None
