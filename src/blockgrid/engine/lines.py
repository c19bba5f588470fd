from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Set, Tuple

import numpy as np

from .grid import Coordinate, GridState

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineClearResult:
    """Rows and columns that cleared (or would clear), sorted ascending."""

    rows: Tuple[int, ...] = ()
    columns: Tuple[int, ...] = ()

    @property
    def rows_cleared(self) -> int:
        return len(self.rows)

    @property
    def columns_cleared(self) -> int:
        return len(self.columns)

    @property
    def lines_cleared(self) -> int:
        return len(self.rows) + len(self.columns)

    def __bool__(self) -> bool:
        return self.lines_cleared > 0


def find_full_lines(occupancy: np.ndarray) -> LineClearResult:
    full_rows = np.flatnonzero(np.all(occupancy, axis=1))
    full_cols = np.flatnonzero(np.all(occupancy, axis=0))
    return LineClearResult(
        rows=tuple(int(r) for r in full_rows),
        columns=tuple(int(c) for c in full_cols),
    )


def line_cells(result: LineClearResult, grid: GridState) -> Set[Coordinate]:
    cells: Set[Coordinate] = set()
    for row in result.rows:
        cells.update((x, row) for x in range(grid.columns))
    for col in result.columns:
        cells.update((col, y) for y in range(grid.rows))
    return cells


def clear_lines(grid: GridState) -> LineClearResult:
    """
    Clear complete rows and columns of the grid.

    Full lines are detected once before any cell is removed, so a cell on a
    full row and a full column is removed a single time. Remaining cells keep
    their positions.
    """
    result = find_full_lines(grid.occupancy())
    if not result:
        return result
    for x, y in sorted(line_cells(result, grid)):
        grid.remove_cell(x, y)
    LOG.debug("cleared rows=%s columns=%s", result.rows, result.columns)
    return result


def preview_clear(offsets: Sequence[Tuple[int, int]], anchor: Coordinate, grid: GridState) -> LineClearResult:
    """Lines that would clear if the shape were dropped at anchor. Read-only."""
    occupancy = grid.occupancy()
    ax, ay = anchor
    for dx, dy in offsets:
        x, y = ax + dx, ay + dy
        if grid.is_inside(x, y):
            occupancy[y, x] = True
    return find_full_lines(occupancy)
