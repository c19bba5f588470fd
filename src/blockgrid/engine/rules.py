from __future__ import annotations

from typing import Iterable

from .grid import GridState
from .placement import has_any_anchor
from .supply import Piece


def has_legal_move(pieces: Iterable[Piece], grid: GridState) -> bool:
    """True if any unplaced piece fits somewhere on the board. Never cached."""
    for piece in pieces:
        if piece.placed:
            continue
        if has_any_anchor(piece.offsets, grid):
            return True
    return False


def is_game_over(pieces: Iterable[Piece], grid: GridState) -> bool:
    return not has_legal_move(pieces, grid)
