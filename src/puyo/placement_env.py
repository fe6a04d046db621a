"""Placement-level duel environment.

Each action is a complete placement decision for the agent's pair: pick a
layout and a target column, hard-drop, lock and resolve the chain.  The
built-in greedy opponent then places its own pair, and garbage is exchanged
through the regular :class:`~puyo.match.Duel` hand-off.

Example usage
-------------

>>> from puyo.placement_env import PlacementEnv
>>> env = PlacementEnv()
>>> obs, info = env.reset(seed=0)
>>> done = False
>>> while not done:
...     legal = [i for i, ok in enumerate(info["action_mask"]) if ok]
...     obs, reward, done, info = env.step(legal[0])
>>> env.duel.finished
True

Notes
-----
- Action ``rotation * width + column`` places the pair in layout
  ``rotation`` (``0`` vertical, ``1`` horizontal) with its anchor in
  ``column``.  Only placements reachable from the spawn pose by one
  rotation and sideways slides are legal.
- ``info`` carries a fixed-size ``action_mask`` and the concrete
  ``placements`` mapping action indices to target poses.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .ai import choose_move, reachable_placements
from .config import EngineConfig
from .events import ChainResolved, Event, GarbageDropped
from .match import Duel
from .piece import LAYOUTS, Piece
from .utils import format_grid, render_grid

AGENT_ID = 1
OPPONENT_ID = 2


class PlacementEnv:
    """Agent-versus-greedy-opponent duel with score-based rewards.

    Key properties
    - Reward: the agent's chain score for the placement, minus
      ``garbage_penalty`` per garbage row landing on its board.  Topping out
      adds ``top_out_penalty``; the opponent topping out adds ``win_reward``.
    - Invalid action indices cost ``invalid_action_penalty`` and leave the
      state unchanged.
    - Episode termination: either side tops out.
    """

    def __init__(
        self,
        *,
        config: Optional[EngineConfig] = None,
        invalid_action_penalty: float = -1.0,
        top_out_penalty: float = -500.0,
        win_reward: float = 500.0,
        garbage_penalty: float = 0.0,
        opponent_max_slide: Optional[int] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.invalid_action_penalty = invalid_action_penalty
        self.top_out_penalty = top_out_penalty
        self.win_reward = win_reward
        self.garbage_penalty = garbage_penalty
        self.opponent_max_slide = opponent_max_slide
        self.duel = Duel(self.config)
        self._placements: Dict[int, Piece] = {}

    @property
    def action_space_n(self) -> int:
        return len(LAYOUTS) * self.config.width

    @property
    def done(self) -> bool:
        return self.duel.finished

    def action_index(self, piece: Piece) -> int:
        return piece.rotation * self.config.width + piece.column

    def reset(self, *, seed: Optional[int] = None) -> Tuple[Dict, Dict]:
        """Reset both boards and return ``(observation, info)``."""

        seeds = (seed, seed + 1) if seed is not None else None
        self.duel.reset(seeds)
        return self._observe()

    def legal_actions(self) -> List[int]:
        return sorted(self._refresh_placements())

    def _refresh_placements(self) -> Dict[int, Piece]:
        agent = self.duel.player(AGENT_ID)
        if self.done or agent.active is None:
            self._placements = {}
        else:
            self._placements = {
                self.action_index(p): p
                for p in reachable_placements(agent.board, agent.active)
            }
        return self._placements

    def _observe(self) -> Tuple[Dict, Dict]:
        agent = self.duel.player(AGENT_ID)
        opponent = self.duel.player(OPPONENT_ID)
        placements = self._refresh_placements()
        mask = [i in placements for i in range(self.action_space_n)]
        obs = {
            "board": agent.board.rows(),
            "opponent_board": opponent.board.rows(),
            "active_colors": [int(c) for c in agent.active.colors] if agent.active else [0, 0],
            "upcoming_colors": [int(c) for c in agent.upcoming.colors] if agent.upcoming else [0, 0],
            "pending_garbage": agent.pending_garbage,
            "score": agent.score,
        }
        info = {
            "action_mask": mask,
            "placements": dict(placements),
        }
        return obs, info

    def step(self, action: int) -> Tuple[Dict, float, bool, Dict]:
        """Apply placement ``action`` and return ``(obs, reward, done, info)``."""

        if self.done:
            obs, info = self._observe()
            return obs, 0.0, True, info

        target = self._refresh_placements().get(action)
        if target is None:
            obs, info = self._observe()
            return obs, float(self.invalid_action_penalty), False, info

        reward = 0.0
        for event in self.duel.place(AGENT_ID, target):
            reward += self._event_reward(event)

        if self.duel.finished:
            reward += float(self.top_out_penalty)
        else:
            opponent = self.duel.player(OPPONENT_ID)
            if opponent.active is not None:
                move = choose_move(
                    opponent.board,
                    opponent.active,
                    self.config,
                    max_slide=self.opponent_max_slide,
                )
                self.duel.place(OPPONENT_ID, move)
            if self.duel.finished:
                reward += float(self.win_reward)

        obs, info = self._observe()
        return obs, float(reward), self.done, info

    def _event_reward(self, event: Event) -> float:
        if isinstance(event, ChainResolved):
            return float(event.score_delta)
        if isinstance(event, GarbageDropped):
            return -self.garbage_penalty * event.rows
        return 0.0

    def render_ascii(self) -> str:
        """Return both boards side by side with the active pairs overlaid."""

        left, right = (
            format_grid(
                render_grid(self.duel.player(pid).board, self.duel.player(pid).active)
            ).splitlines()
            for pid in (AGENT_ID, OPPONENT_ID)
        )
        return "\n".join(f"{l_row}  {r_row}" for l_row, r_row in zip(left, right))


__all__ = ["PlacementEnv", "AGENT_ID", "OPPONENT_ID"]
