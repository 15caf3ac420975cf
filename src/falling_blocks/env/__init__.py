"""Gymnasium environments for Falling Blocks."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 9x20 environment
register(
    id="FallingBlocks-9x20-v0",
    entry_point="falling_blocks.env.falling_blocks_env:FallingBlocksEnv",
)
