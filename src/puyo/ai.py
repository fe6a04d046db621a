"""Greedy computer opponent.

:func:`choose_move` looks one piece ahead: it slides the active pair to every
reachable column, hard-drops it, resolves the resulting chain and scores the
board.  The winning pose is returned at the piece's current row; stepping the
real piece there over the following ticks is the host's job, and
:class:`OpponentController` is a ready-made host helper for that.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

from .board import Board
from .chain import ChainResult, lock_piece
from .config import DIFFICULTY_SETTINGS, Difficulty, EngineConfig, HeuristicWeights
from .controller import can_move_down, hard_drop, move_left, move_right, rotate
from .events import Command, CommandType
from .features import column_heights, height_variance
from .piece import Color, Piece

if TYPE_CHECKING:  # pragma: no cover
    from .game_state import PlayerState


LOGGER = logging.getLogger(__name__)


def candidate_moves(board: Board, piece: Piece, max_slide: Optional[int] = None) -> List[Piece]:
    """Return every pose reachable by sliding ``piece`` sideways.

    The starting pose comes first, followed by each step of a slide to the
    left wall and then each step of a slide to the right wall.  This order is
    the tie-break order used by :func:`choose_move`.  ``max_slide`` caps the
    number of steps taken in each direction.
    """

    moves: List[Piece] = [piece]
    for step in (move_left, move_right):
        current = piece
        taken = 0
        while max_slide is None or taken < max_slide:
            moved = step(board, current)
            if moved == current:
                break
            current = moved
            taken += 1
            moves.append(current)
    return moves


def reachable_placements(board: Board, piece: Piece, max_slide: Optional[int] = None) -> List[Piece]:
    """Return slide candidates for the current layout and, if it fits, the rotated one."""

    placements = candidate_moves(board, piece, max_slide)
    rotated = rotate(board, piece)
    if rotated is not None:
        seen = {(p.rotation, p.column) for p in placements}
        for candidate in candidate_moves(board, rotated, max_slide):
            key = (candidate.rotation, candidate.column)
            if key not in seen:
                seen.add(key)
                placements.append(candidate)
    return placements


def simulate_drop(board: Board, piece: Piece, config: Optional[EngineConfig] = None) -> ChainResult:
    """Hard-drop ``piece``, lock it and resolve the chain it triggers."""

    return lock_piece(board, hard_drop(board, piece), config)


def evaluate_board(
    board: Board, cascade_depth: int, weights: Optional[HeuristicWeights] = None
) -> float:
    """Score ``board`` for the greedy search.  Higher is better."""

    weights = weights or HeuristicWeights()
    heights = column_heights(board)
    return (
        weights.chain * cascade_depth
        - weights.max_height * max(heights)
        - weights.height_variance * height_variance(heights)
    )


def choose_move(
    board: Board,
    piece: Piece,
    config: Optional[EngineConfig] = None,
    *,
    max_slide: Optional[int] = None,
) -> Piece:
    """Return the pose the opponent wants ``piece`` dropped from.

    Ties keep the candidate generated first by :func:`candidate_moves`, so the
    starting pose wins any tie it is part of, and otherwise the nearest
    slide-left pose beats every slide-right pose.
    """

    config = config or EngineConfig()
    best = piece
    best_score = float("-inf")
    for candidate in candidate_moves(board, piece, max_slide):
        result = simulate_drop(board, candidate, config)
        score = evaluate_board(result.board, result.cascade_depth, config.weights)
        if score > best_score:
            best, best_score = candidate, score
    return best


def next_command(board: Board, piece: Piece, target: Piece) -> CommandType:
    """Return the single step that brings ``piece`` closer to ``target``.

    Rotation is fixed first, then the column; once aligned the piece soft
    drops until it rests and is then locked.
    """

    if piece.rotation != target.rotation:
        return CommandType.ROTATE
    if target.column < piece.column:
        return CommandType.MOVE_LEFT
    if target.column > piece.column:
        return CommandType.MOVE_RIGHT
    if can_move_down(board, piece):
        return CommandType.SOFT_DROP
    return CommandType.LOCK


class OpponentController:
    """Host-side driver for a computer player.

    Difficulty only sets how often a command may be issued; the evaluation is
    the same at every level.  The target pose is computed once per piece.
    """

    def __init__(
        self,
        player_id: int,
        difficulty: Difficulty = Difficulty.NORMAL,
        config: Optional[EngineConfig] = None,
        *,
        max_slide: Optional[int] = None,
    ) -> None:
        self.player_id = player_id
        self.difficulty = Difficulty(difficulty)
        self.config = config or EngineConfig()
        self.max_slide = max_slide
        self.response_ms = DIFFICULTY_SETTINGS[self.difficulty].ai_response_ms
        self._last_action_ms: Optional[float] = None
        self._target: Optional[Piece] = None
        self._planned_for: Optional[Tuple[int, Tuple[Color, Color]]] = None

    @property
    def target(self) -> Optional[Piece]:
        return self._target

    def reset(self) -> None:
        self._last_action_ms = None
        self._target = None
        self._planned_for = None

    def ready(self, now_ms: float) -> bool:
        """Return ``True`` if enough time has passed since the last command."""

        if self._last_action_ms is None:
            return True
        return now_ms - self._last_action_ms >= self.response_ms

    def plan(self, state: "PlayerState") -> Optional[Piece]:
        """Return the target pose for the active piece, computing it on first use.

        The target is cached per spawn (``state.spawn_serial``), which keeps
        counting across :meth:`PlayerState.reset_game`.
        """

        if state.active is None or state.game_over:
            return None
        key = (state.spawn_serial, state.active.colors)
        if self._planned_for != key or self._target is None:
            self._target = choose_move(
                state.board, state.active, self.config, max_slide=self.max_slide
            )
            self._planned_for = key
            LOGGER.debug(
                "Player %d targets column %d (rotation %d)",
                self.player_id,
                self._target.column,
                self._target.rotation,
            )
        return self._target

    def next_command(self, state: "PlayerState", now_ms: float) -> Optional[Command]:
        """Return the next command for ``state`` or ``None`` while throttled."""

        if not self.ready(now_ms):
            return None
        target = self.plan(state)
        if target is None or state.active is None:
            return None
        self._last_action_ms = now_ms
        kind = next_command(state.board, state.active, target)
        return Command(player_id=self.player_id, kind=kind)


__all__ = [
    "candidate_moves",
    "reachable_placements",
    "simulate_drop",
    "evaluate_board",
    "choose_move",
    "next_command",
    "OpponentController",
]
