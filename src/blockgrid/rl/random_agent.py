from __future__ import annotations

import argparse
import logging
import random
import statistics
from typing import Dict, List, Optional, Sequence

import gymnasium as gym
import numpy as np

import blockgrid.env  # noqa: F401  ensure registration
from blockgrid.engine import FileHighScoreStore
from blockgrid.utils.logging import setup_logger

LOG = logging.getLogger(__name__)


def play_game(env: gym.Env, rng: random.Random, seed: Optional[int] = None) -> Dict[str, float]:
    """Play one session choosing uniformly among legal placements."""
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    while True:
        valid = np.argwhere(info["action_mask"])  # rows of (slot, y, x)
        if valid.size == 0:
            break
        slot, y, x = valid[rng.randrange(len(valid))]
        obs, reward, terminated, truncated, info = env.step((int(slot), int(x), int(y)))
        total_reward += float(reward)
        if terminated or truncated:
            break
    stats = dict(env.unwrapped.session.get_game_stats())
    stats["total_reward"] = total_reward
    return stats


def run_random(games: int = 10, seed: Optional[int] = None, high_score_file: Optional[str] = None) -> List[Dict[str, float]]:
    store = FileHighScoreStore(high_score_file) if high_score_file else None
    env = gym.make("BlockGrid-8x8-v0", high_scores=store)
    rng = random.Random(seed)
    results: List[Dict[str, float]] = []
    try:
        for game_idx in range(games):
            game_seed = None if seed is None else seed + game_idx
            stats = play_game(env, rng, seed=game_seed)
            results.append(stats)
            LOG.info(
                "game %d: score=%d pieces=%d lines=%d fill=%.2f",
                game_idx, stats["final_score"], stats["pieces_placed"], stats["lines_cleared"], stats["final_fill_ratio"],
            )
    finally:
        env.close()

    if results:
        scores = [r["final_score"] for r in results]
        LOG.info(
            "%d games: mean score %.1f, median %.1f, best %d, mean pieces %.1f",
            len(results),
            statistics.fmean(scores),
            statistics.median(scores),
            max(scores),
            statistics.fmean(r["pieces_placed"] for r in results),
        )
    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play blockgrid sessions with a uniformly random legal-move agent")
    p.add_argument("--games", type=int, default=10)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--high-score-file", type=str, default=None)
    p.add_argument("--log-level", type=str, default="info", choices=["debug", "info", "warning", "error"])
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logger(name="blockgrid", use_rich=True, level=args.log_level)
    run_random(games=args.games, seed=args.seed, high_score_file=args.high_score_file)


if __name__ == "__main__":  # pragma: no cover
    main()
