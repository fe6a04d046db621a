"""Cascading chain resolution.

After a lock the board goes through ``MATCHING -> CLEARING -> SETTLING`` until
no group qualifies.  Each clear pass removes every qualifying group at once,
along with any garbage touching a cleared cell, and counts as one level of
cascade depth.  Every pass strictly reduces the number of filled cells, so
the loop always terminates.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Set, Tuple

from .board import Board
from .config import EngineConfig
from .gravity import compact
from .matching import NEIGHBOURS, Coordinate, MatchGroup, find_matches
from .piece import Color, Piece


class ChainPhase(Enum):
    STABLE = "stable"
    MATCHING = "matching"
    CLEARING = "clearing"
    SETTLING = "settling"
    DONE = "done"


@dataclass(frozen=True)
class ChainStep:
    """One clear pass of a chain."""

    depth: int
    groups: Tuple[MatchGroup, ...]
    cleared: FrozenSet[Coordinate]
    score: int


@dataclass(frozen=True)
class ChainResult:
    """Outcome of resolving a board after a lock."""

    board: Board
    cascade_depth: int
    score: int
    garbage_rows: int
    steps: Tuple[ChainStep, ...] = ()

    @property
    def cleared(self) -> int:
        """Total number of cells removed over all passes."""

        return sum(len(step.cleared) for step in self.steps)


def cells_to_clear(board: Board, groups: List[MatchGroup]) -> Set[Coordinate]:
    """Return group cells plus garbage orthogonally adjacent to any of them."""

    cleared: Set[Coordinate] = set()
    for group in groups:
        cleared |= group.cells
    garbage: Set[Coordinate] = set()
    for row, col in cleared:
        for dr, dc in NEIGHBOURS:
            nr, nc = row + dr, col + dc
            if board.in_bounds(nr, nc) and board.get_cell(nr, nc) == Color.GARBAGE:
                garbage.add((nr, nc))
    return cleared | garbage


def clear_cells(board: Board, cells: Set[Coordinate]) -> Board:
    """Return a copy of ``board`` with ``cells`` emptied."""

    cleared = board.copy()
    for row, col in cells:
        cleared.clear_cell(row, col)
    return cleared


def resolve_chain(board: Board, config: Optional[EngineConfig] = None) -> ChainResult:
    """Run match/clear/settle passes on ``board`` until it is stable.

    A board with no qualifying group is returned unchanged with depth ``0``.
    """

    config = config or EngineConfig()
    rules = config.scoring
    current = board
    depth = 0
    total = 0
    steps: List[ChainStep] = []
    groups: List[MatchGroup] = []

    phase = ChainPhase.MATCHING
    while phase is not ChainPhase.DONE:
        if phase is ChainPhase.MATCHING:
            groups = find_matches(current, config.match_threshold)
            phase = ChainPhase.CLEARING if groups else ChainPhase.DONE
        elif phase is ChainPhase.CLEARING:
            cleared = cells_to_clear(current, groups)
            current = clear_cells(current, cleared)
            depth += 1
            score = rules.pass_score(depth)
            total += score
            steps.append(
                ChainStep(
                    depth=depth,
                    groups=tuple(groups),
                    cleared=frozenset(cleared),
                    score=score,
                )
            )
            phase = ChainPhase.SETTLING
        elif phase is ChainPhase.SETTLING:
            current = compact(current)
            phase = ChainPhase.MATCHING
        else:  # pragma: no cover - STABLE is only the state before a lock
            raise RuntimeError(f"Unexpected chain phase: {phase}")

    return ChainResult(
        board=current,
        cascade_depth=depth,
        score=total,
        garbage_rows=rules.garbage_rows(total),
        steps=tuple(steps),
    )


def settle_piece(board: Board, piece: Piece) -> Board:
    """Return a copy of ``board`` with ``piece`` written in and each of its cells dropped.

    Only the pair's own cells fall, lower cell first, so a horizontal pair
    resting on uneven columns splits.  The rest of the board is untouched,
    which keeps garbage holes open under the stack.
    """

    placed = board.copy()
    for (row, col), color in sorted(piece.cells(), key=lambda cell: -cell[0][0]):
        while placed.is_empty(row + 1, col):
            row += 1
        placed.set_cell(row, col, color)
    return placed


def lock_piece(board: Board, piece: Piece, config: Optional[EngineConfig] = None) -> ChainResult:
    """Write ``piece`` into ``board``, let it settle, then resolve chains."""

    return resolve_chain(settle_piece(board, piece), config)


__all__ = [
    "ChainPhase",
    "ChainStep",
    "ChainResult",
    "cells_to_clear",
    "clear_cells",
    "resolve_chain",
    "settle_piece",
    "lock_piece",
]
