"""Column compaction."""

from __future__ import annotations

import numpy as np

from .board import Board
from .piece import Color


def compact(board: Board) -> Board:
    """Return a copy of ``board`` with every column settled.

    Non-empty cells fall towards the bottom row keeping their relative order.
    Columns never interact, and compacting a settled board returns an equal
    board.
    """

    settled = board.copy()
    for col in range(settled.width):
        settled.compact_column(col)
    return settled


def is_settled(board: Board) -> bool:
    """Return ``True`` if no cell has an empty cell below it."""

    occupied = board.grid != Color.EMPTY
    # A floating cell is an occupied cell directly above an empty one.
    return not bool(np.any(occupied[:-1] & ~occupied[1:]))


__all__ = ["compact", "is_settled"]
