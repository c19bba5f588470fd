from __future__ import annotations

from blockgrid.engine import GridState, Piece, has_legal_move, is_game_over, shapes


def test_detector_scans_every_unplaced_piece(fill) -> None:
    grid = GridState(8, 8)
    fill(grid, [(x, y) for x in range(8) for y in range(8) if (x + y) % 2 == 0])
    big, single = Piece(shapes.BLOCK_3X3), Piece(shapes.SINGLE)
    assert has_legal_move([big, single], grid)
    assert not has_legal_move([big], grid)
    assert is_game_over([big], grid)


def test_placed_pieces_are_ignored() -> None:
    grid = GridState(8, 8)
    piece = Piece(shapes.SINGLE, placed=True)
    assert not has_legal_move([piece], grid)


def test_detector_is_recomputed_after_board_changes(fill) -> None:
    grid = GridState(8, 8)
    pieces = [Piece(shapes.SINGLE)]
    cells = [(x, y) for x in range(8) for y in range(8)]
    ids = fill(grid, cells[:-1])
    assert has_legal_move(pieces, grid)
    fill(grid, cells[-1:])
    assert is_game_over(pieces, grid)
    grid.remove_cell(0, 0)
    assert has_legal_move(pieces, grid)
    assert len(ids) == 63
