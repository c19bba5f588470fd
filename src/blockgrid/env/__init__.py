"""Gymnasium environments for the blockgrid puzzle."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 8x8 placement environment
register(
    id="BlockGrid-8x8-v0",
    entry_point="blockgrid.env.block_grid_env:BlockGridEnv",
)

__all__ = ["BlockGrid-8x8-v0"]
