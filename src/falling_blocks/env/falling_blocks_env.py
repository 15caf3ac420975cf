from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, FallingBlocksGame, GameConfig
from falling_blocks.game.geometry import NUM_KINDS
from falling_blocks.visualization.palette import BACKGROUND, SPAWN_BUFFER, color_for_index


class FallingBlocksEnv(gym.Env):
    """Gymnasium wrapper around the falling-blocks engine.

    Actions are the five engine commands (left, right, rotate, down, none).
    Every command other than ``down`` is followed by one gravity tick, so
    each env step advances the fall clock once.

    Observation: board grid with settled cells as ``color + 1`` and the
    falling piece overlaid as ``-(kind + 1)``.
    Reward: rows cleared during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = FallingBlocksGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        cfg = self.game.config
        self.observation_space = spaces.Box(
            low=-NUM_KINDS, high=cfg.palette_size, shape=(cfg.rows, cfg.cols), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(Command))

        self._steps = 0
        self._lines_total = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state()

    def _get_info(self) -> Dict[str, Any]:
        board = self.game.state.board
        return {
            "steps": self._steps,
            "lines_cleared_total": self._lines_total,
            "max_height": board.get_max_height(),
            "holes": board.count_holes(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        self._lines_total = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = Command(int(action))
        results = [self.game.step(command)]
        if command != Command.DOWN:
            results.append(self.game.tick())

        lines = sum(r.lines_cleared for r in results)
        terminated = any(r.reset for r in results)
        self._steps += 1
        self._lines_total += lines
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["landed"] = any(r.landed for r in results)
        return self._get_obs(), float(lines), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.state
        board = state.board
        cell = 12
        img = np.zeros((board.rows * cell, board.cols * cell, 3), dtype=np.uint8)
        img[:, :, :] = BACKGROUND
        img[: self.game.config.spawn_buffer_rows * cell, :, :] = SPAWN_BUFFER
        for c in board.cells + state.piece.occupied_cells():
            x, y = c.pos
            if board.is_inside(x, y):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_index(c.color)
        return img

    def close(self) -> None:
        pass
