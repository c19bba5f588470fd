"""blockgrid: an 8x8 polyomino placement puzzle engine.

Exports the session facade and configuration; components live in
``blockgrid.engine``.
"""

from .engine import GameConfig, GameSession, PlacementResult, PlacementStatus, SessionState

__all__ = [
    "GameConfig",
    "GameSession",
    "PlacementResult",
    "PlacementStatus",
    "SessionState",
]
