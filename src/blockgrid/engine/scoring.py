from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from .config import GameConfig


@dataclass
class ScoreState:
    score: int = 0
    combo_count: int = 0
    last_clear_time: Optional[float] = None


class ScoringEngine:
    """Handles placement and line clear scoring plus combo bookkeeping.

    The combo multiplier is tracked and exposed but never applied to the
    score that is added.
    """

    def __init__(self, config: Optional[GameConfig] = None, clock: Callable[[], float] = time.monotonic) -> None:
        config = config or GameConfig()
        self.points_per_cell = config.points_per_cell
        self.line_clear_points = config.line_clear_points
        self.combo_window = config.combo_window
        self.combo_multiplier = config.combo_multiplier
        self.clock = clock
        self.state = ScoreState()

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def combo_count(self) -> int:
        return self.state.combo_count

    def reset(self) -> None:
        self.state = ScoreState()

    def placement_score(self, cell_count: int) -> int:
        return int(cell_count) * self.points_per_cell

    def clear_score(self, lines_cleared: int) -> int:
        if lines_cleared <= 0:
            return 0
        return lines_cleared * lines_cleared * self.line_clear_points

    def multiplier(self) -> float:
        return 1 + self.state.combo_count * (self.combo_multiplier - 1)

    def score_placement(self, cell_count: int) -> int:
        gained = self.placement_score(cell_count)
        self.state.score += gained
        return gained

    def score_clear(self, rows_cleared: int, columns_cleared: int) -> int:
        lines = rows_cleared + columns_cleared
        if lines <= 0:
            return 0
        self._record_clear()
        gained = self.clear_score(lines)
        self.state.score += gained
        return gained

    def _record_clear(self) -> None:
        now = self.clock()
        last = self.state.last_clear_time
        if last is not None and now - last < self.combo_window:
            self.state.combo_count += 1
        else:
            self.state.combo_count = 0
        self.state.last_clear_time = now
