"""Gymnasium-compatible wrapper for the placement-level duel.

Observation is a flat vector suitable for an MLP policy:
  - own board, colour tags scaled to ``[0, 1]`` (height * width)
  - opponent board, same encoding (height * width)
  - active and upcoming pair colours, scaled (4)
  - pending garbage rows as a fraction of the board height (1)
  - optional action mask (2 * width)

Action space is ``Discrete(2 * width)``; see :mod:`puyo.placement_env` for
the index layout.  Invalid actions are penalised and treated as no-op.
"""

from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import EngineConfig
from .piece import Color
from .placement_env import PlacementEnv

MAX_TAG = float(max(Color))


class PuyoDuelGymEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        *,
        config: Optional[EngineConfig] = None,
        include_action_mask: bool = True,
        invalid_action_penalty: float = -1.0,
        top_out_penalty: float = -500.0,
        win_reward: float = 500.0,
        garbage_penalty: float = 0.0,
        max_steps: Optional[int] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._env = PlacementEnv(
            config=config,
            invalid_action_penalty=invalid_action_penalty,
            top_out_penalty=top_out_penalty,
            win_reward=win_reward,
            garbage_penalty=garbage_penalty,
        )
        self.config = self._env.config
        self.include_action_mask = include_action_mask
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(self._env.action_space_n)
        cells = self.config.width * self.config.height
        self._obs_size = 2 * cells + 4 + 1 + (
            self._env.action_space_n if include_action_mask else 0
        )
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(self._obs_size,), dtype=np.float32
        )
        self._steps = 0
        self._max_steps = max_steps

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        obs, info = self._env.reset(seed=seed)
        self._steps = 0
        return self._convert_obs(obs, info), self._convert_info(info)

    def step(self, action: int):
        obs, reward, done, info = self._env.step(int(action))
        self._steps += 1
        terminated = bool(done)
        truncated = False
        if self._max_steps is not None and self._steps >= self._max_steps:
            truncated = True
        return self._convert_obs(obs, info), float(reward), terminated, truncated, self._convert_info(info)

    def render(self):
        return self._env.render_ascii()

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _convert_obs(self, obs: Dict, info: Dict) -> np.ndarray:
        board = np.asarray(obs["board"], dtype=np.float32).reshape(-1) / MAX_TAG
        opponent = np.asarray(obs["opponent_board"], dtype=np.float32).reshape(-1) / MAX_TAG
        pieces = np.asarray(
            list(obs["active_colors"]) + list(obs["upcoming_colors"]), dtype=np.float32
        ) / MAX_TAG
        garbage = np.array(
            [min(obs["pending_garbage"], self.config.height) / self.config.height],
            dtype=np.float32,
        )
        parts = [board, opponent, pieces, garbage]
        if self.include_action_mask:
            parts.append(np.asarray(info["action_mask"], dtype=np.float32))
        return np.concatenate(parts, dtype=np.float32)

    def _convert_info(self, info: Dict) -> Dict:
        return {"action_mask": np.asarray(info["action_mask"], dtype=bool)}


__all__ = ["PuyoDuelGymEnv"]
