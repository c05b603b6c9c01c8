from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_rl.game import Action


class OccupancyObservationWrapper(gym.ObservationWrapper):
    """Splits the signed board into two 0/1 planes: locked cells and falling piece.

    Output shape is (2, height, width) float32, which feeds an MLP policy
    without the piece kind leaking in as a magnitude.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.observation_space, spaces.Box)
        h, w = env.observation_space.shape
        self.observation_space = spaces.Box(low=0.0, high=1.0, shape=(2, h, w), dtype=np.float32)

    def observation(self, observation):  # type: ignore[override]
        board = np.asarray(observation)
        locked = (board > 0).astype(np.float32)
        active = (board < 0).astype(np.float32)
        return np.stack((locked, active))


class NoIdleActionWrapper(gym.ActionWrapper):
    """Maps the agent's NONE action to a soft drop.

    Keeps short training runs from idling at the top of the grid.
    """

    def action(self, action):  # type: ignore[override]
        if int(action) == int(Action.NONE):
            return int(Action.SOFT_DROP)
        return int(action)
