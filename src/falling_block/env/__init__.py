"""Gymnasium environments for the falling-block engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="FallingBlock-10x20-v0",
    entry_point="falling_block.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["FallingBlock-10x20-v0"]
