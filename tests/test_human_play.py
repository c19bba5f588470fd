from __future__ import annotations

import pytest

from blockgrid.engine import shapes
from blockgrid.visualization.human_play import build_parser, piece_origin, screen_to_grid


def test_screen_to_grid() -> None:
    assert screen_to_grid(20, 20, 48, 20) == (0, 0)
    assert screen_to_grid(67, 20, 48, 20) == (0, 0)
    assert screen_to_grid(68, 116, 48, 20) == (1, 2)
    assert screen_to_grid(10, 10, 48, 20) == (-1, -1)


@pytest.mark.parametrize("shape_index", [shapes.O, shapes.BLOCK_3X3, shapes.I4_VERTICAL, shapes.R_SHAPE])
def test_piece_origin_keeps_negative_offsets_inside_slot(shape_index: int) -> None:
    x0, cell, margin = 424, 48, 20
    for slot in range(3):
        ox, oy = piece_origin(shape_index, slot, x0, cell, margin)
        min_dx, min_dy, max_dx, max_dy = shapes.bounding_box(shape_index)
        slot_top = margin + slot * cell * 5
        assert ox + min_dx * cell == x0 + cell
        assert oy + min_dy * cell == slot_top + cell
        assert oy + (max_dy + 1) * cell <= slot_top + cell * 5


def test_parser() -> None:
    args = build_parser().parse_args(["--seed", "3"])
    assert args.seed == 3
    assert args.high_score_file is None
    assert args.log_level == "info"
