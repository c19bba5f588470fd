from __future__ import annotations

from blockgrid.engine import GridState, can_place, has_any_anchor, shapes, valid_anchors


def test_can_place_on_empty_board() -> None:
    grid = GridState(8, 8)
    assert can_place(shapes.offsets_of(shapes.I4), (2, 0), grid)
    assert can_place(shapes.offsets_of(shapes.I4), (4, 0), grid)
    assert not can_place(shapes.offsets_of(shapes.I4), (5, 0), grid)
    assert not can_place(shapes.offsets_of(shapes.BLOCK_3X3), (0, 0), grid)
    assert can_place(shapes.offsets_of(shapes.BLOCK_3X3), (1, 1), grid)


def test_can_place_rejects_overlap(fill) -> None:
    grid = GridState(8, 8)
    fill(grid, [(3, 0)])
    assert not can_place(shapes.offsets_of(shapes.I4), (2, 0), grid)
    assert can_place(shapes.offsets_of(shapes.I4), (4, 0), grid)


def test_can_place_never_accepts_out_of_bounds_cells() -> None:
    grid = GridState(8, 8)
    for index in range(shapes.shape_count()):
        offsets = shapes.offsets_of(index)
        for ax in range(-3, 11):
            for ay in range(-3, 11):
                if can_place(offsets, (ax, ay), grid):
                    assert all(0 <= ax + dx < 8 and 0 <= ay + dy < 8 for dx, dy in offsets)


def test_can_place_has_no_side_effects(fill) -> None:
    grid = GridState(8, 8)
    fill(grid, [(0, 0), (1, 1)])
    before = grid.cells.copy()
    for _ in range(3):
        can_place(shapes.offsets_of(shapes.O), (0, 0), grid)
    assert (grid.cells == before).all()


def test_valid_anchors_for_3x3_on_empty_board() -> None:
    grid = GridState(8, 8)
    anchors = valid_anchors(shapes.offsets_of(shapes.BLOCK_3X3), grid)
    assert len(anchors) == 36
    assert anchors[0] == (1, 1)
    assert anchors[-1] == (6, 6)


def test_has_any_anchor_on_full_board(fill) -> None:
    grid = GridState(8, 8)
    fill(grid, [(x, y) for x in range(8) for y in range(8) if (x, y) != (4, 4)])
    assert has_any_anchor(shapes.offsets_of(shapes.SINGLE), grid)
    assert not has_any_anchor(shapes.offsets_of(shapes.I2_VERTICAL), grid)
