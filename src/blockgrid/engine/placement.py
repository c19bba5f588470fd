from __future__ import annotations

from typing import List, Sequence, Tuple

from .grid import Coordinate, GridState


def can_place(offsets: Sequence[Tuple[int, int]], anchor: Coordinate, grid: GridState) -> bool:
    """Check if every cell of the footprint is on the board and empty"""
    ax, ay = anchor
    for dx, dy in offsets:
        x, y = ax + dx, ay + dy
        if not grid.is_inside(x, y):
            return False
        if grid.is_occupied(x, y):
            return False
    return True


def valid_anchors(offsets: Sequence[Tuple[int, int]], grid: GridState) -> List[Coordinate]:
    """Get all (x, y) anchors where the shape fits, row by row"""
    anchors: List[Coordinate] = []
    for y in range(grid.rows):
        for x in range(grid.columns):
            if can_place(offsets, (x, y), grid):
                anchors.append((x, y))
    return anchors


def has_any_anchor(offsets: Sequence[Tuple[int, int]], grid: GridState) -> bool:
    for x in range(grid.columns):
        for y in range(grid.rows):
            if can_place(offsets, (x, y), grid):
                return True
    return False
