"""Gymnasium environments for Tetromino."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default Tetromino environment
register(
    id="Tetromino-v0",
    entry_point="tetromino.env.tetris_env:TetrisEnv",
)

__all__ = ["Tetromino-v0"]
