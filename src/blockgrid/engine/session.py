from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Sequence, Tuple

from . import shapes
from .config import GameConfig
from .grid import Coordinate, GridState
from .highscore import HighScoreStore, MemoryHighScoreStore
from .lines import LineClearResult, clear_lines, preview_clear
from .placement import can_place, valid_anchors
from .rules import has_legal_move
from .scoring import ScoringEngine
from .supply import SupplyGenerator, SupplyQueue

LOG = logging.getLogger(__name__)


class SessionState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class PlacementStatus(IntEnum):
    ACCEPTED = 0
    INVALID_PLACEMENT = 1
    EMPTY_SLOT = 2
    NOT_PLAYING = 3


@dataclass(frozen=True)
class PieceDescriptor:
    slot: int
    shape_index: int
    offsets: Tuple[Tuple[int, int], ...]
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class PlacementResult:
    status: PlacementStatus
    placement_score: int = 0
    clear_score: int = 0
    cleared: LineClearResult = LineClearResult()
    game_over: bool = False

    @property
    def accepted(self) -> bool:
        return self.status == PlacementStatus.ACCEPTED

    @property
    def rows_cleared(self) -> int:
        return self.cleared.rows_cleared

    @property
    def columns_cleared(self) -> int:
        return self.cleared.columns_cleared

    @property
    def score_delta(self) -> int:
        return self.placement_score + self.clear_score


class GameSession:
    """Main game engine for the placement puzzle.

    Owns the grid, the supply queue and the score, and runs each placement
    as a single step: validate, place, score, clear, refill, detect game over.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        high_scores: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or GameConfig()
        self.grid = GridState(self.config.columns, self.config.rows)
        self.supply = SupplyQueue(self.config.pieces_per_wave)
        self.generator = SupplyGenerator(self.config, rng)
        self.scoring = ScoringEngine(self.config, clock)
        self.high_scores: HighScoreStore = high_scores if high_scores is not None else MemoryHighScoreStore()
        self.high_score = self.high_scores.load()
        self.state = SessionState.MENU

        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.waves_dealt = 0

    # ---------- Session lifecycle ----------
    def start_session(self, seed: Optional[int] = None) -> None:
        self.save_high_score()
        if seed is not None:
            self.generator.seed(seed)
        self.grid.reset()
        self.scoring.reset()
        self.supply.clear()
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.waves_dealt = 0
        self._set_state(SessionState.PLAYING)
        self._deal_wave()
        self._check_game_over()

    def restart_session(self, seed: Optional[int] = None) -> None:
        self.start_session(seed)

    def pause_session(self) -> bool:
        if self.state != SessionState.PLAYING:
            return False
        self._set_state(SessionState.PAUSED)
        return True

    def resume_session(self) -> bool:
        if self.state != SessionState.PAUSED:
            return False
        self._set_state(SessionState.PLAYING)
        return True

    def end_session(self) -> None:
        if self.state == SessionState.GAME_OVER:
            return
        self._set_state(SessionState.GAME_OVER)
        self.save_high_score()
        LOG.info("game over: score=%d lines=%d pieces=%d", self.score, self.total_lines_cleared, self.total_pieces_placed)

    def _set_state(self, state: SessionState) -> None:
        if state != self.state:
            LOG.info("session %s -> %s", self.state.value, state.value)
        self.state = state

    # ---------- Supply ----------
    def _deal_wave(self, shape_indices: Optional[Sequence[int]] = None) -> None:
        if shape_indices is None:
            shape_indices = self.generator.generate_wave(self.grid)
        self.supply.deal(shape_indices)
        self.waves_dealt += 1

    def deal_wave(self, shape_indices: Sequence[int]) -> List[PieceDescriptor]:
        """Replace the supply with a scripted wave, then re-check for moves."""
        self._deal_wave(shape_indices)
        if self.state in (SessionState.PLAYING, SessionState.PAUSED):
            self._check_game_over()
        return self.descriptors()

    def try_spawn_wave(self) -> List[PieceDescriptor]:
        if self.state == SessionState.PLAYING and self.supply.is_exhausted():
            self._deal_wave()
            self._check_game_over()
        return self.descriptors()

    def descriptors(self) -> List[PieceDescriptor]:
        return [
            PieceDescriptor(slot, piece.shape_index, piece.offsets, piece.color)
            for slot, piece in enumerate(self.supply.slots)
            if piece is not None
        ]

    # ---------- Placement ----------
    def can_place(self, slot: int, anchor: Coordinate) -> bool:
        piece = self.supply.get(slot)
        if piece is None:
            return False
        return can_place(piece.offsets, anchor, self.grid)

    def try_place(self, slot: int, anchor: Coordinate) -> PlacementResult:
        if self.state != SessionState.PLAYING:
            return PlacementResult(PlacementStatus.NOT_PLAYING, game_over=self.is_game_over())
        piece = self.supply.get(slot)
        if piece is None:
            return PlacementResult(PlacementStatus.EMPTY_SLOT)
        anchor = (int(anchor[0]), int(anchor[1]))
        if not can_place(piece.offsets, anchor, self.grid):
            return PlacementResult(PlacementStatus.INVALID_PLACEMENT)

        self.supply.take(slot)
        self.grid.place(piece.piece_id, anchor, piece.offsets)
        piece.anchor = anchor
        piece.placed = True
        placement_score = self.scoring.score_placement(piece.cell_count)

        cleared = clear_lines(self.grid)
        clear_score = self.scoring.score_clear(cleared.rows_cleared, cleared.columns_cleared)

        self.total_pieces_placed += 1
        self.total_lines_cleared += cleared.lines_cleared
        self._track_high_score()
        LOG.debug(
            "placed %s at %s: +%d placement, +%d clear (rows=%s cols=%s)",
            shapes.name_of(piece.shape_index), anchor, placement_score, clear_score, cleared.rows, cleared.columns,
        )

        if self.supply.is_exhausted():
            self._deal_wave()
        self._check_game_over()
        return PlacementResult(
            PlacementStatus.ACCEPTED,
            placement_score=placement_score,
            clear_score=clear_score,
            cleared=cleared,
            game_over=self.is_game_over(),
        )

    def try_place_shape(self, shape_index: int, anchor: Coordinate) -> PlacementResult:
        slot = self.supply.find_shape(shape_index)
        if slot is None:
            if self.state != SessionState.PLAYING:
                return PlacementResult(PlacementStatus.NOT_PLAYING, game_over=self.is_game_over())
            return PlacementResult(PlacementStatus.EMPTY_SLOT)
        return self.try_place(slot, anchor)

    def preview_clear(self, offsets: Sequence[Tuple[int, int]], anchor: Coordinate) -> LineClearResult:
        return preview_clear(offsets, anchor, self.grid)

    def get_valid_actions(self) -> List[Tuple[int, int, int]]:
        """List of (slot, x, y) legal placements"""
        actions: List[Tuple[int, int, int]] = []
        for slot, piece in enumerate(self.supply.slots):
            if piece is None:
                continue
            for x, y in valid_anchors(piece.offsets, self.grid):
                actions.append((slot, x, y))
        return actions

    # ---------- Game over / score ----------
    def _check_game_over(self) -> None:
        if not has_legal_move(self.supply.pieces(), self.grid):
            self.end_session()

    def is_game_over(self) -> bool:
        return self.state == SessionState.GAME_OVER

    def is_playing(self) -> bool:
        return self.state == SessionState.PLAYING

    @property
    def score(self) -> int:
        return self.scoring.score

    def current_score(self) -> int:
        return self.scoring.score

    def combo_multiplier(self) -> float:
        return self.scoring.multiplier()

    def _track_high_score(self) -> None:
        if self.score > self.high_score:
            self.high_score = self.score

    def save_high_score(self) -> None:
        """Write the best score to the store if it beats the stored value."""
        if self.high_score > self.high_scores.load():
            self.high_scores.save(self.high_score)

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "high_score": self.high_score,
            "pieces_placed": self.total_pieces_placed,
            "lines_cleared": self.total_lines_cleared,
            "waves_dealt": self.waves_dealt,
            "final_fill_ratio": self.grid.get_filled_ratio(),
            "combo_count": self.scoring.combo_count,
            "avg_score_per_piece": self.score / max(1, self.total_pieces_placed),
        }
