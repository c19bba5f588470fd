from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set, Tuple

import numpy as np

from .shapes import footprint

LOG = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

EMPTY = 0


class PlacementError(ValueError):
    """Raised when a footprint is written without being validated first."""


class GridState:
    """Occupancy matrix with cell ownership.

    Cells hold 0 when empty, otherwise the positive id of the placed piece
    that owns them. The matrix is indexed ``[y, x]``.
    """

    def __init__(self, columns: int = 8, rows: int = 8) -> None:
        self.columns = int(columns)
        self.rows = int(rows)
        self.cells = np.zeros((self.rows, self.columns), dtype=np.int32)
        self._pieces: Dict[int, Set[Coordinate]] = {}

    def reset(self) -> None:
        self.cells.fill(EMPTY)
        self._pieces.clear()

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.columns and 0 <= y < self.rows

    def is_occupied(self, x: int, y: int) -> bool:
        # Out-of-bounds reads as occupied so bounds and collisions compose
        if not self.is_inside(x, y):
            return True
        return bool(self.cells[y, x] != EMPTY)

    def owner_at(self, x: int, y: int) -> int:
        if not self.is_inside(x, y):
            return EMPTY
        return int(self.cells[y, x])

    def place(self, piece_id: int, anchor: Coordinate, offsets: Iterable[Coordinate]) -> None:
        if piece_id <= EMPTY:
            raise PlacementError(f"piece ids must be positive, got {piece_id}")
        if piece_id in self._pieces:
            raise PlacementError(f"piece {piece_id} is already on the grid")
        cells = footprint(offsets, anchor)
        for x, y in cells:
            if self.is_occupied(x, y):
                raise PlacementError(f"piece {piece_id} cannot occupy ({x}, {y})")
        for x, y in cells:
            self.cells[y, x] = piece_id
        self._pieces[piece_id] = set(cells)

    def remove_cell(self, x: int, y: int) -> bool:
        """Clear one cell. Returns True if this removed the owner's last cell."""
        owner = self.owner_at(x, y)
        if owner == EMPTY:
            return False
        self.cells[y, x] = EMPTY
        remaining = self._pieces.get(owner)
        if remaining is None:
            return False
        remaining.discard((x, y))
        if not remaining:
            del self._pieces[owner]
            LOG.debug("piece %d fully removed", owner)
            return True
        return False

    def cells_of(self, piece_id: int) -> Set[Coordinate]:
        return set(self._pieces.get(piece_id, ()))

    def piece_ids(self) -> List[int]:
        return sorted(self._pieces)

    def occupancy(self) -> np.ndarray:
        return self.cells != EMPTY

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def get_filled_ratio(self) -> float:
        return self.filled_count() / float(self.columns * self.rows)

    def check_invariants(self) -> None:
        """Assert the matrix equals the union of registered footprints."""
        union: Set[Coordinate] = set()
        for pid, cells in self._pieces.items():
            if not cells:
                raise AssertionError(f"piece {pid} is registered with no cells")
            overlap = union & cells
            if overlap:
                raise AssertionError(f"piece {pid} overlaps cells {sorted(overlap)}")
            union |= cells
            for x, y in cells:
                if int(self.cells[y, x]) != pid:
                    raise AssertionError(f"cell ({x}, {y}) not owned by piece {pid}")
        ys, xs = np.nonzero(self.cells)
        occupied = {(int(x), int(y)) for x, y in zip(xs, ys)}
        if occupied != union:
            raise AssertionError(f"occupied cells differ from placed footprints: {sorted(occupied ^ union)}")
