from __future__ import annotations

import numpy as np
import pytest

from blockgrid.engine import GameConfig, GridState, PlacementError, shapes


def test_out_of_bounds_reads_as_occupied() -> None:
    grid = GridState(8, 8)
    assert not grid.is_occupied(0, 0)
    for x, y in [(-1, 0), (0, -1), (8, 0), (0, 8), (100, 100)]:
        assert grid.is_occupied(x, y)


def test_place_writes_ownership() -> None:
    grid = GridState(8, 8)
    grid.place(7, (2, 3), shapes.offsets_of(shapes.O))
    assert grid.cells_of(7) == {(2, 3), (3, 3), (2, 4), (3, 4)}
    assert grid.owner_at(3, 4) == 7
    assert grid.filled_count() == 4
    grid.check_invariants()


def test_invalid_place_raises_without_writing() -> None:
    grid = GridState(8, 8)
    grid.place(1, (0, 0), ((0, 0),))
    before = grid.cells.copy()
    with pytest.raises(PlacementError):
        grid.place(2, (1, 0), ((0, 0), (-1, 0)))
    with pytest.raises(PlacementError):
        grid.place(3, (7, 0), shapes.offsets_of(shapes.I4))
    assert np.array_equal(grid.cells, before)
    assert grid.piece_ids() == [1]


def test_duplicate_piece_id_rejected() -> None:
    grid = GridState(8, 8)
    grid.place(1, (0, 0), ((0, 0),))
    with pytest.raises(PlacementError):
        grid.place(1, (5, 5), ((0, 0),))


def test_remove_cell_destroys_piece_with_last_cell() -> None:
    grid = GridState(8, 8)
    grid.place(4, (0, 0), shapes.offsets_of(shapes.I2_VERTICAL))
    assert grid.remove_cell(0, 0) is False
    assert grid.piece_ids() == [4]
    assert grid.remove_cell(0, 1) is True
    assert grid.piece_ids() == []
    assert grid.remove_cell(0, 1) is False
    grid.check_invariants()


def test_reset_clears_everything() -> None:
    grid = GridState(8, 8)
    grid.place(1, (1, 1), shapes.offsets_of(shapes.PLUS))
    grid.reset()
    assert grid.filled_count() == 0
    assert grid.piece_ids() == []


def test_non_square_dimensions() -> None:
    grid = GridState(columns=10, rows=6)
    assert grid.cells.shape == (6, 10)
    assert not grid.is_occupied(9, 5)
    assert grid.is_occupied(5, 9)


def test_config_rejects_bad_dimensions() -> None:
    with pytest.raises(ValueError):
        GameConfig(columns=0)
    with pytest.raises(ValueError):
        GameConfig(compatible_candidates=(5, 5))
