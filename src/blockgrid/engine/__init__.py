"""Puzzle grid engine.

Exports the engine components:
- shapes: indexed shape catalog (offsets and colors)
- GridState: occupancy matrix with cell ownership
- can_place / valid_anchors: placement validation
- clear_lines / preview_clear: row and column clearing
- ScoringEngine: placement, clear and combo scoring
- SupplyGenerator / SupplyQueue: the 3-piece supply
- has_legal_move: game over detection
- GameSession: session state machine tying it all together
"""

from . import shapes
from .config import GameConfig
from .grid import GridState, PlacementError
from .highscore import FileHighScoreStore, HighScoreStore, MemoryHighScoreStore
from .lines import LineClearResult, clear_lines, find_full_lines, preview_clear
from .placement import can_place, has_any_anchor, valid_anchors
from .rules import has_legal_move, is_game_over
from .scoring import ScoreState, ScoringEngine
from .session import GameSession, PieceDescriptor, PlacementResult, PlacementStatus, SessionState
from .supply import Piece, SupplyGenerator, SupplyQueue

__all__ = [
    "shapes",
    "GameConfig",
    "GridState",
    "PlacementError",
    "HighScoreStore",
    "MemoryHighScoreStore",
    "FileHighScoreStore",
    "LineClearResult",
    "clear_lines",
    "find_full_lines",
    "preview_clear",
    "can_place",
    "has_any_anchor",
    "valid_anchors",
    "has_legal_move",
    "is_game_over",
    "ScoreState",
    "ScoringEngine",
    "GameSession",
    "PieceDescriptor",
    "PlacementResult",
    "PlacementStatus",
    "SessionState",
    "Piece",
    "SupplyGenerator",
    "SupplyQueue",
]
