from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_rl.game import Action, GameConfig, TetrisGame, TetrominoType
from tetris_rl.game.pieces import CATALOG


class TetrisEnv(gym.Env):
    """One environment step is one game tick carrying at most one key press.

    Gravity is driven by ``seconds_per_step`` of simulated time per step, so
    with the default 0.45 s soft-drop interval the piece falls every third
    step. The reward is the number of rows cleared during the step.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 seconds_per_step: float = 0.15,
                 max_episode_steps: int = 5000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.seconds_per_step = float(seconds_per_step)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.game.grid.height, self.game.grid.width
        n_kinds = len(TetrominoType)
        # Locked cells are kind+1, the falling piece is -(kind+1)
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0
        self._viewer = None

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        result = self.game.step(Action(int(action)), self.seconds_per_step)
        self._steps += 1

        reward = float(result.rows_cleared)
        terminated = bool(result.game_over)
        if terminated:
            reward += self.terminal_penalty
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["outcome"] = None if result.outcome is None else result.outcome.value
        info["locked"] = result.locked
        if self.render_mode == "human":
            self.render()
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                row = h - 1 - y  # image rows run top-down
                for x in range(w):
                    v = int(state[y, x])
                    color = CATALOG[TetrominoType(abs(v) - 1)].color if v else (30, 30, 36)
                    img[row * cell : (row + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        if self.render_mode == "human":
            from tetris_rl.visualization.renderer import Renderer

            if self._viewer is None:
                self._viewer = Renderer()
                self._viewer.open(self.game.grid.width, self.game.grid.height)
            self._viewer.draw(self._viewer.screen, self.game.snapshot())
        return None

    def close(self) -> None:
        if self._viewer is not None:
            self._viewer.close()
            self._viewer = None
