from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetromino.game import GameConfig, GameState, Key, ShapeType, Tetris
from tetromino.game.config import BLANK, FPS
from tetromino.visualization.palette import color_for_value


class TetrisEnv(gym.Env):
    """
    Real-time game exposed as a turn-based environment.

    Actions (7 total):
      0: No-op
      1: Move Left
      2: Move Right
      3: Rotate CW
      4: Rotate CCW
      5: Soft Drop
      6: Hard Drop

    Each step presses the chosen key, then releases it and advances simulated
    time by `frame_skip / FPS` seconds so gravity keeps running between actions.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": FPS}

    ACTION_KEYS = (None, Key.LEFT, Key.RIGHT, Key.UP, Key.Q, Key.DOWN, Key.SPACE)

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        frame_skip: int = 1,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.max_episode_steps = int(max_episode_steps)
        self.game = Tetris(self.config)
        self.clock = 0.0

        h, w = self.config.board_height, self.config.board_width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=BLANK, high=self.config.palette_size - 1, shape=(h, w), dtype=np.int8),
                "piece": spaces.Box(low=0, high=1, shape=(h, w), dtype=np.int8),
                "next_shape": spaces.Discrete(len(ShapeType)),
            }
        )
        self.action_space = spaces.Discrete(len(self.ACTION_KEYS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        piece = np.zeros_like(self.game.board.grid)
        if self.game.falling_piece is not None:
            for x, y in self.game.falling_piece.cells_at():
                if self.game.board.is_inside(x, y):
                    piece[y, x] = 1
        return {
            "board": self.game.board.clone_state(),
            "piece": piece,
            "next_shape": int(self.game.next_piece.shape),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines_cleared_total": self.game.lines_cleared_total,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        # Derive the game generator from the env's seeded np_random so resets are reproducible.
        rng_seed = int(self.np_random.integers(0, 2**32 - 1))
        self.clock = 0.0
        self.game = Tetris(self.config, rng=random.Random(rng_seed), now=self.clock)
        self.game.update(self.clock)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action}")
        key = self.ACTION_KEYS[action]
        score_before = self.game.score

        state = self.game.update(self.clock, pressed=key)
        self.clock += self.frame_skip / FPS
        if state != GameState.GAME_OVER:
            state = self.game.update(self.clock, released=key)

        self._steps += 1
        terminated = state == GameState.GAME_OVER
        truncated = not terminated and self._steps >= self.max_episode_steps
        reward = float(self.game.score - score_before)
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(state[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
