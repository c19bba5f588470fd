from __future__ import annotations

from typing import Callable, Iterable, List, Tuple

import pytest

from blockgrid.engine import GameSession, GridState, Piece, shapes


def _fill(grid: GridState, cells: Iterable[Tuple[int, int]]) -> List[int]:
    ids: List[int] = []
    for cell in cells:
        piece = Piece(shapes.SINGLE)
        grid.place(piece.piece_id, cell, piece.offsets)
        ids.append(piece.piece_id)
    return ids


@pytest.fixture
def fill() -> Callable[[GridState, Iterable[Tuple[int, int]]], List[int]]:
    """Occupy cells with single-cell pieces, bypassing the supply."""
    return _fill


@pytest.fixture
def session() -> GameSession:
    s = GameSession()
    s.start_session(seed=1234)
    return s
