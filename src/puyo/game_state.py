"""Per-player game state.

Each :class:`PlayerState` owns exactly one board and one pair of pieces.  A
chain that sends garbage reports it in a :class:`~puyo.events.ChainResolved`
event; the opponent's own state turns that into pending rows through
:meth:`PlayerState.receive_garbage`, and the rows land when the opponent
next locks a piece.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board
from .chain import ChainResult, lock_piece
from .config import EngineConfig
from .controller import hard_drop, move_down, move_left, move_right, rotate, spawn_piece
from .events import (
    ChainResolved,
    Command,
    CommandType,
    Event,
    GameOver,
    GarbageDropped,
    PieceMoved,
    RotationRejected,
)
from .garbage import add_garbage
from .piece import Piece, palette


LOGGER = logging.getLogger(__name__)


@dataclass
class PlayerState:
    """Mutable state for one side of a match."""

    player_id: int = 1
    config: EngineConfig = field(default_factory=EngineConfig)
    seed: Optional[int] = None
    board: Board = field(init=False)
    active: Optional[Piece] = field(default=None, init=False)
    upcoming: Optional[Piece] = field(default=None, init=False)
    score: int = field(default=0, init=False)
    chain_count: int = field(default=0, init=False)
    best_chain: int = field(default=0, init=False)
    attack_meter: int = field(default=0, init=False)
    pending_garbage: int = field(default=0, init=False)
    pieces: int = field(default=0, init=False)
    game_over: bool = field(default=False, init=False)
    # Counts every successful spawn; never rewound by reset_game.
    spawn_serial: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)
        self.reset_game()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _random_piece(self) -> Piece:
        colors = palette(self.config.palette_size)
        pair = (self._rng.choice(colors), self._rng.choice(colors))
        return spawn_piece(pair, self.config)

    def spawn_piece(self) -> Optional[Piece]:
        """Promote the upcoming piece to active and draw a new upcoming one.

        Sets :attr:`game_over` and returns ``None`` when the spawn cell is
        blocked or the new pair does not fit.
        """

        piece = self.upcoming or self._random_piece()
        self.upcoming = self._random_piece()
        blocked = self.board.is_top_row_blocked(
            self.config.spawn_column, self.config.spawn_row
        )
        if blocked or not self.board.can_place(piece):
            self.active = None
            self.game_over = True
            LOGGER.info("Player %d topped out after %d pieces", self.player_id, self.pieces)
            return None
        self.active = piece
        self.spawn_serial += 1
        return piece

    def reset_game(self, seed: Optional[int] = None) -> None:
        """Reset the board, counters and piece queue for a new game."""

        if seed is not None:
            self.seed = seed
            self._rng.seed(seed)
        self.board = Board(self.config.width, self.config.height)
        self.active = None
        self.upcoming = None
        self.score = 0
        self.chain_count = 0
        self.best_chain = 0
        self.attack_meter = 0
        self.pending_garbage = 0
        self.pieces = 0
        self.game_over = False
        self.spawn_piece()

    def receive_garbage(self, rows: int) -> None:
        """Queue ``rows`` of garbage to drop on this board at the next lock."""

        if rows < 0:
            raise ValueError("Garbage rows must be non-negative")
        self.pending_garbage += rows

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def apply(self, command: Command) -> List[Event]:
        """Apply ``command`` to this player and return the resulting events.

        Commands are ignored once the game is over.  Moves that are blocked
        produce no event; a rejected rotation produces
        :class:`RotationRejected`.
        """

        if command.player_id != self.player_id:
            raise ValueError(
                f"Command for player {command.player_id} sent to player {self.player_id}"
            )
        if self.game_over or self.active is None:
            return []

        kind = CommandType(command.kind)
        if kind is CommandType.LOCK:
            return self.lock()
        if kind is CommandType.ROTATE:
            rotated = rotate(self.board, self.active)
            if rotated is None:
                return [RotationRejected(self.player_id, self.active)]
            return self._moved(rotated)
        if kind is CommandType.MOVE_LEFT:
            return self._moved(move_left(self.board, self.active))
        if kind is CommandType.MOVE_RIGHT:
            return self._moved(move_right(self.board, self.active))
        if kind is CommandType.SOFT_DROP:
            return self._moved(move_down(self.board, self.active))
        if kind is CommandType.HARD_DROP:
            return self._moved(hard_drop(self.board, self.active))
        raise ValueError(f"Unknown command: {command.kind!r}")

    def _moved(self, piece: Piece) -> List[Event]:
        if piece == self.active:
            return []
        self.active = piece
        return [PieceMoved(self.player_id, piece)]

    def place(self, piece: Piece) -> List[Event]:
        """Put the active pair at ``piece``'s pose, hard-drop it and lock.

        Used by placement-level hosts that pick a final pose directly.
        """

        if self.game_over or self.active is None:
            raise RuntimeError("Cannot place a piece when the game is over")
        if piece.colors != self.active.colors:
            raise ValueError("Placement colours do not match the active piece")
        if not self.board.can_place(piece):
            raise ValueError("Placement does not fit on the board")
        self.active = hard_drop(self.board, piece)
        return self.lock()

    def lock(self) -> List[Event]:
        """Lock the active piece, resolve chains, drop garbage and spawn the next pair."""

        if self.active is None:
            return []
        result: ChainResult = lock_piece(self.board, self.active, self.config)
        self.board = result.board
        self.pieces += 1
        self.chain_count = result.cascade_depth
        self.best_chain = max(self.best_chain, result.cascade_depth)
        self.score += result.score
        if result.cascade_depth:
            self.attack_meter = min(
                self.attack_meter + self.config.attack_per_chain * result.cascade_depth,
                self.config.attack_meter_max,
            )
            LOGGER.debug(
                "Player %d chain depth %d for %d points (%d garbage rows)",
                self.player_id,
                result.cascade_depth,
                result.score,
                result.garbage_rows,
            )

        events: List[Event] = [
            ChainResolved(
                player_id=self.player_id,
                cascade_depth=result.cascade_depth,
                score_delta=result.score,
                garbage_rows_for_opponent=result.garbage_rows,
            )
        ]

        if self.pending_garbage:
            rows = self.pending_garbage
            self.pending_garbage = 0
            self.board = add_garbage(self.board, rows, self._rng)
            events.append(GarbageDropped(self.player_id, rows))
            LOGGER.debug("Player %d received %d garbage rows", self.player_id, rows)

        self.active = None
        if self.spawn_piece() is None:
            events.append(GameOver(self.player_id))
        return events


__all__ = ["PlayerState"]
