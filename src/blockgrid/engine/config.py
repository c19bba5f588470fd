from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class GameConfig:
    """Configuration for the 8x8 placement puzzle"""
    columns: int = 8
    rows: int = 8
    pieces_per_wave: int = 3
    points_per_cell: int = 10
    line_clear_points: int = 100
    combo_window: float = 0.5
    combo_multiplier: float = 1.5
    random_seed: Optional[int] = None
    # Shape indices [start, stop) scanned when filling slots 1..n
    compatible_candidates: Tuple[int, int] = (0, 10)
    fallback_shape: int = 8

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.columns}x{self.rows}")
        if self.pieces_per_wave <= 0:
            raise ValueError(f"pieces_per_wave must be positive, got {self.pieces_per_wave}")
        start, stop = self.compatible_candidates
        if not 0 <= start < stop:
            raise ValueError(f"invalid compatible_candidates range: {self.compatible_candidates}")
