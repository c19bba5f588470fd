from __future__ import annotations

from collections import Counter

import numpy as np

from blockgrid.engine import GridState, clear_lines, preview_clear, shapes


class CountingGrid(GridState):
    def __init__(self, columns: int = 8, rows: int = 8) -> None:
        super().__init__(columns, rows)
        self.removed = Counter()

    def remove_cell(self, x: int, y: int) -> bool:
        self.removed[(x, y)] += 1
        return super().remove_cell(x, y)


def test_no_full_lines_is_a_no_op(fill) -> None:
    grid = GridState(8, 8)
    fill(grid, [(x, 0) for x in range(7)])
    before = grid.cells.copy()
    result = clear_lines(grid)
    assert not result
    assert result.rows_cleared == 0 and result.columns_cleared == 0
    assert np.array_equal(grid.cells, before)


def test_full_row_is_cleared_without_gravity(fill) -> None:
    grid = GridState(8, 8)
    fill(grid, [(x, 3) for x in range(8)])
    fill(grid, [(2, 2), (5, 4)])
    result = clear_lines(grid)
    assert result.rows == (3,)
    assert result.columns == ()
    assert not any(grid.is_occupied(x, 3) for x in range(8))
    assert grid.is_occupied(2, 2) and grid.is_occupied(5, 4)
    grid.check_invariants()


def test_row_and_column_intersection_removed_once(fill) -> None:
    grid = CountingGrid(8, 8)
    fill(grid, [(x, y) for y in (0, 1) for x in range(8)])
    fill(grid, [(7, y) for y in range(2, 8)])
    result = clear_lines(grid)
    assert result.rows == (0, 1)
    assert result.columns == (7,)
    assert result.lines_cleared == 3
    assert grid.removed[(7, 0)] == 1
    assert grid.removed[(7, 1)] == 1
    assert all(count == 1 for count in grid.removed.values())
    assert len(grid.removed) == 22
    assert grid.filled_count() == 0


def test_clear_trims_partially_covered_pieces(fill) -> None:
    grid = GridState(8, 8)
    grid.place(900001, (0, 0), shapes.offsets_of(shapes.I2_VERTICAL))
    fill(grid, [(x, 0) for x in range(1, 8)])
    clear_lines(grid)
    assert grid.cells_of(900001) == {(0, 1)}
    assert 900001 in grid.piece_ids()
    grid.check_invariants()


def test_preview_reports_lines_without_mutating(fill) -> None:
    grid = GridState(8, 8)
    fill(grid, [(x, 0) for x in range(7)])
    fill(grid, [(7, y) for y in range(1, 8)])
    before = grid.cells.copy()
    first = preview_clear(shapes.offsets_of(shapes.SINGLE), (7, 0), grid)
    for _ in range(5):
        assert preview_clear(shapes.offsets_of(shapes.SINGLE), (7, 0), grid) == first
    assert first.rows == (0,)
    assert first.columns == (7,)
    assert np.array_equal(grid.cells, before)
    grid.check_invariants()


def test_preview_ignores_out_of_bounds_cells(fill) -> None:
    grid = GridState(8, 8)
    fill(grid, [(x, 0) for x in range(6)])
    result = preview_clear(shapes.offsets_of(shapes.I4), (6, 0), grid)
    assert result.rows == (0,)
    result = preview_clear(shapes.offsets_of(shapes.I4), (7, 0), grid)
    assert result.rows == ()
