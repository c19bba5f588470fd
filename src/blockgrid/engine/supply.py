from __future__ import annotations

"""
Piece supply: the 3-slot queue and the wave generator that fills it.
"""

import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from . import shapes
from .config import GameConfig
from .grid import Coordinate, GridState
from .placement import has_any_anchor

LOG = logging.getLogger(__name__)

_piece_ids = itertools.count(1)


@dataclass
class Piece:
    """Individual piece instance"""
    shape_index: int
    piece_id: int = field(default_factory=lambda: next(_piece_ids))
    anchor: Optional[Coordinate] = None
    placed: bool = False

    @property
    def offsets(self) -> Tuple[Tuple[int, int], ...]:
        return shapes.offsets_of(self.shape_index)

    @property
    def color(self) -> Tuple[int, int, int]:
        return shapes.color_of(self.shape_index)

    @property
    def cell_count(self) -> int:
        return shapes.cell_count(self.shape_index)


class SupplyQueue:
    """Fixed number of slots, each empty or holding one unplaced piece"""

    def __init__(self, size: int = 3) -> None:
        self.size = int(size)
        self.slots: List[Optional[Piece]] = [None] * self.size

    def clear(self) -> None:
        self.slots = [None] * self.size

    def deal(self, shape_indices: Sequence[int]) -> List[Piece]:
        if len(shape_indices) != self.size:
            raise ValueError(f"expected {self.size} shapes, got {len(shape_indices)}")
        for index in shape_indices:
            if not 0 <= index < shapes.shape_count():
                raise IndexError(f"unknown shape index {index}")
        self.slots = [Piece(int(index)) for index in shape_indices]
        return list(self.slots)

    def get(self, slot: int) -> Optional[Piece]:
        if not 0 <= slot < self.size:
            return None
        return self.slots[slot]

    def take(self, slot: int) -> Piece:
        piece = self.get(slot)
        if piece is None:
            raise LookupError(f"slot {slot} is empty")
        self.slots[slot] = None
        return piece

    def find_shape(self, shape_index: int) -> Optional[int]:
        for slot, piece in enumerate(self.slots):
            if piece is not None and piece.shape_index == shape_index:
                return slot
        return None

    def pieces(self) -> List[Piece]:
        return [piece for piece in self.slots if piece is not None]

    def is_exhausted(self) -> bool:
        return all(piece is None for piece in self.slots)

    def __len__(self) -> int:
        return len(self.pieces())


class SupplyGenerator:
    """Chooses shape indices for a wave.

    Slot 0 is a weighted draw over the whole catalog. The other slots only
    draw from candidate shapes that fit somewhere on the current board, with
    the single cell as the fallback.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)

    def seed(self, seed: Optional[int]) -> None:
        self.rng = random.Random(seed)

    def random_shape(self) -> int:
        rng = self.rng
        r = rng.random()
        if r < 0.65:
            # Standard pieces
            if rng.random() < 0.6:
                return rng.randrange(0, 7)
            if rng.random() < 0.5:
                return rng.randrange(14, 22)  # rotated variants
            return rng.randrange(shapes.R_SHAPE, 28)
        if r < 0.8:
            return rng.randrange(shapes.PLUS, shapes.BLOCK_3X3 + 1)
        if r < 0.95:
            return rng.randrange(shapes.I2_VERTICAL, shapes.I4_VERTICAL + 1)
        # Small pieces
        if rng.random() < 0.7:
            return shapes.SMALL_L
        if rng.random() < 0.85:
            return rng.randrange(shapes.SMALL_L_90, shapes.SMALL_L_90 + 2)
        return shapes.SINGLE

    def compatible_shapes(self, grid: GridState) -> List[int]:
        start, stop = self.config.compatible_candidates
        stop = min(stop, shapes.shape_count())
        return [index for index in range(start, stop) if has_any_anchor(shapes.offsets_of(index), grid)]

    def compatible_shape(self, grid: GridState) -> int:
        candidates = self.compatible_shapes(grid)
        if not candidates:
            LOG.debug("no compatible shapes, falling back to shape %d", self.config.fallback_shape)
            return self.config.fallback_shape
        return candidates[self.rng.randrange(0, len(candidates))]

    def generate_wave(self, grid: GridState) -> List[int]:
        wave = [self.random_shape()]
        for _ in range(1, self.config.pieces_per_wave):
            wave.append(self.compatible_shape(grid))
        LOG.debug("generated wave %s", wave)
        return wave
