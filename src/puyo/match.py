"""Two-player match coordination.

:class:`Duel` owns two independent :class:`~puyo.game_state.PlayerState`
instances.  It never touches a board directly: commands go to the player they
name, and garbage from a resolved chain is handed to the opponent as pending
rows for that player's own next lock.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .config import EngineConfig
from .events import ChainResolved, Command, Event, GameOver
from .game_state import PlayerState
from .piece import Piece


LOGGER = logging.getLogger(__name__)

PLAYER_IDS = (1, 2)


class Duel:
    """Two boards, one command stream."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        seeds: Optional[Iterable[Optional[int]]] = None,
    ) -> None:
        self.config = config or EngineConfig()
        seed_list = list(seeds) if seeds is not None else [None, None]
        if len(seed_list) != len(PLAYER_IDS):
            raise ValueError("Expected one seed per player")
        self.players: Dict[int, PlayerState] = {
            pid: PlayerState(player_id=pid, config=self.config, seed=seed)
            for pid, seed in zip(PLAYER_IDS, seed_list)
        }
        self.loser: Optional[int] = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def player(self, player_id: int) -> PlayerState:
        try:
            return self.players[player_id]
        except KeyError:
            raise ValueError(f"Unknown player id: {player_id}") from None

    def opponent_of(self, player_id: int) -> PlayerState:
        self.player(player_id)
        other = PLAYER_IDS[1] if player_id == PLAYER_IDS[0] else PLAYER_IDS[0]
        return self.players[other]

    @property
    def finished(self) -> bool:
        return self.loser is not None

    @property
    def winner(self) -> Optional[int]:
        if self.loser is None:
            return None
        return self.opponent_of(self.loser).player_id

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def reset(self, seeds: Optional[Iterable[Optional[int]]] = None) -> None:
        seed_list = list(seeds) if seeds is not None else [None, None]
        for pid, seed in zip(PLAYER_IDS, seed_list):
            self.players[pid].reset_game(seed)
        self.loser = None

    def dispatch(self, command: Command) -> List[Event]:
        """Route ``command`` to its player and settle cross-player effects."""

        if self.finished:
            return []
        events = self.player(command.player_id).apply(command)
        self._settle(events)
        return events

    def place(self, player_id: int, piece: Piece) -> List[Event]:
        """Drop ``player_id``'s active pair from ``piece``'s pose and lock it."""

        if self.finished:
            raise RuntimeError("Cannot place a piece after the match has ended")
        events = self.player(player_id).place(piece)
        self._settle(events)
        return events

    def _settle(self, events: List[Event]) -> None:
        for event in events:
            if isinstance(event, ChainResolved) and event.garbage_rows_for_opponent:
                opponent = self.opponent_of(event.player_id)
                opponent.receive_garbage(event.garbage_rows_for_opponent)
                LOGGER.debug(
                    "Player %d sends %d garbage rows to player %d",
                    event.player_id,
                    event.garbage_rows_for_opponent,
                    opponent.player_id,
                )
            elif isinstance(event, GameOver) and self.loser is None:
                self.loser = event.player_id
                LOGGER.info("Match over: player %d wins", self.winner)


__all__ = ["Duel", "PLAYER_IDS"]
