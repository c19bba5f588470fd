from __future__ import annotations

"""
Piece shape catalog.

Shapes are plain data: an ordered tuple of (dx, dy) offsets relative to the
anchor cell, looked up by integer index. Every shape contains (0, 0).
"""

from typing import Iterable, List, NamedTuple, Tuple

Offset = Tuple[int, int]
Color = Tuple[int, int, int]


class ShapeSpec(NamedTuple):
    name: str
    offsets: Tuple[Offset, ...]
    color: Color


# Index constants referenced by the supply tiers
O = 0
I4 = 1
SMALL_L = 7
SINGLE = 8
PLUS = 9
BLOCK_3X3 = 10
I2_VERTICAL = 11
I4_VERTICAL = 13
SMALL_L_90 = 22
R_SHAPE = 24

CATALOG: Tuple[ShapeSpec, ...] = (
    ShapeSpec("O", ((0, 0), (1, 0), (0, 1), (1, 1)), (255, 255, 0)),
    ShapeSpec("I4", ((0, 0), (1, 0), (2, 0), (3, 0)), (0, 255, 255)),
    ShapeSpec("T", ((0, 0), (-1, 0), (1, 0), (0, 1)), (255, 0, 255)),
    ShapeSpec("L", ((-1, 0), (0, 0), (1, 0), (1, 1)), (255, 128, 0)),
    ShapeSpec("J", ((-1, 0), (0, 0), (1, 0), (-1, 1)), (0, 0, 255)),
    ShapeSpec("Z", ((-1, 0), (0, 0), (0, 1), (1, 1)), (255, 0, 0)),
    ShapeSpec("S", ((0, 0), (1, 0), (-1, 1), (0, 1)), (0, 255, 0)),
    ShapeSpec("small L", ((0, 0), (1, 0), (0, 1)), (204, 102, 0)),
    ShapeSpec("single", ((0, 0),), (255, 255, 255)),
    ShapeSpec("plus", ((0, 0), (-1, 0), (1, 0), (0, 1), (0, -1)), (255, 179, 230)),
    ShapeSpec(
        "3x3",
        ((-1, -1), (0, -1), (1, -1), (-1, 0), (0, 0), (1, 0), (-1, 1), (0, 1), (1, 1)),
        (0, 255, 179),
    ),
    ShapeSpec("I2 vertical", ((0, 0), (0, 1)), (255, 128, 255)),
    ShapeSpec("I3 vertical", ((0, -1), (0, 0), (0, 1)), (179, 0, 255)),
    ShapeSpec("I4 vertical", ((0, -1), (0, 0), (0, 1), (0, 2)), (0, 255, 255)),
    ShapeSpec("Z180", ((0, -1), (0, 0), (1, 0), (1, 1)), (255, 128, 0)),
    ShapeSpec("S180", ((1, -1), (1, 0), (0, 0), (0, 1)), (128, 255, 0)),
    ShapeSpec("T90", ((0, -1), (0, 0), (0, 1), (1, 0)), (255, 0, 255)),
    ShapeSpec("T180", ((-1, 0), (0, 0), (1, 0), (0, -1)), (255, 0, 255)),
    ShapeSpec("L90", ((0, -1), (0, 0), (0, 1), (1, -1)), (255, 128, 0)),
    ShapeSpec("L180", ((-1, -1), (-1, 0), (0, 0), (1, 0)), (255, 128, 0)),
    ShapeSpec("J90", ((0, -1), (0, 0), (0, 1), (-1, -1)), (0, 0, 255)),
    ShapeSpec("J180", ((-1, 0), (0, 0), (1, 0), (1, -1)), (0, 0, 255)),
    ShapeSpec("small L90", ((0, 0), (0, 1), (1, 1)), (204, 102, 0)),
    ShapeSpec("small L180", ((0, 0), (-1, 0), (0, -1)), (204, 102, 0)),
    ShapeSpec("R", ((0, 0), (0, 1), (0, -1), (1, 1), (1, 0)), (230, 51, 51)),
    ShapeSpec("R mirrored", ((0, 0), (0, 1), (0, -1), (-1, 1), (-1, 0)), (255, 77, 77)),
    ShapeSpec("small R", ((0, 0), (0, 1), (1, 1), (0, -1)), (204, 51, 102)),
    ShapeSpec("wide R", ((0, 0), (0, 1), (0, -1), (1, 1), (2, 0), (1, 0)), (255, 38, 38)),
)


def shape_count() -> int:
    return len(CATALOG)


def offsets_of(index: int) -> Tuple[Offset, ...]:
    return CATALOG[index].offsets


def color_of(index: int) -> Color:
    return CATALOG[index].color


def name_of(index: int) -> str:
    return CATALOG[index].name


def cell_count(index: int) -> int:
    return len(CATALOG[index].offsets)


def bounding_box(index: int) -> Tuple[int, int, int, int]:
    """Return (min_dx, min_dy, max_dx, max_dy) of a shape's offsets"""
    offsets = CATALOG[index].offsets
    xs = [dx for dx, _ in offsets]
    ys = [dy for _, dy in offsets]
    return min(xs), min(ys), max(xs), max(ys)


def footprint(offsets: Iterable[Offset], anchor: Tuple[int, int]) -> List[Tuple[int, int]]:
    ax, ay = anchor
    return [(ax + dx, ay + dy) for dx, dy in offsets]
