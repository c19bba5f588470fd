from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockgrid.engine import GameConfig, GameSession, HighScoreStore, shapes


def _compute_action_mask(session: GameSession) -> np.ndarray:
    cfg = session.config
    mask = np.zeros((cfg.pieces_per_wave, cfg.rows, cfg.columns), dtype=np.bool_)
    if not session.is_playing():
        return mask
    for slot, x, y in session.get_valid_actions():
        mask[slot, y, x] = True
    return mask


class BlockGridEnv(gym.Env):
    """One step is one placement attempt ``(slot, x, y)`` on the 8x8 board."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        reward_weights: Optional[Dict[str, float]] = None,
        invalid_action_penalty: float = -0.1,
        terminal_penalty: float = 0.0,
        max_episode_steps: int = 10000,
        high_scores: Optional[HighScoreStore] = None,
    ) -> None:
        super().__init__()
        self.session = GameSession(config, high_scores=high_scores)
        self.render_mode = render_mode

        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "placement": 0.01,  # per placement point
            "clear": 0.01,      # per clear point
            "lines": 1.0,       # per line cleared
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        cfg = self.session.config
        k = cfg.pieces_per_wave

        # Observation: occupancy (0/1), shape index per slot (-1 for empty)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(cfg.rows, cfg.columns), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=shapes.shape_count() - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (slot, x, y)
        self.action_space = spaces.MultiDiscrete((k, cfg.columns, cfg.rows))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.session.config.pieces_per_wave
        grid = self.session.grid.occupancy().astype(np.int8)
        pieces = np.full((k,), -1, dtype=np.int8)
        for slot, piece in enumerate(self.session.supply.slots[:k]):
            if piece is not None:
                pieces[slot] = int(piece.shape_index)
        return {
            "grid": grid,
            "pieces": pieces,
            "pieces_remaining": len(self.session.supply),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.session),
            "score": self.session.score,
            "high_score": self.session.high_score,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.session)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.start_session(seed)
        self._steps = 0
        obs = self._get_obs()
        info = self._get_info()
        self._last_obs = obs
        return obs, info

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        slot, x, y = map(int, action)

        result = self.session.try_place(slot, (x, y))

        reward_components: Dict[str, float] = {}
        if result.accepted:
            reward_components["placement"] = self.reward_weights["placement"] * float(result.placement_score)
            reward_components["clear"] = self.reward_weights["clear"] * float(result.clear_score)
            reward_components["lines"] = self.reward_weights["lines"] * float(result.cleared.lines_cleared)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = bool(self.session.is_game_over())
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["placement_status"] = result.status.name
        info["engine_score_delta"] = float(result.score_delta)
        info["cleared_rows"] = result.cleared.rows
        info["cleared_columns"] = result.cleared.columns
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["grid"] if self._last_obs is not None else self.session.grid.occupancy()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = (204, 85, 0) if grid[y, x] else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        self.session.save_high_score()
