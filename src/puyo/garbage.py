"""Garbage injection for the receiving player's board."""

from __future__ import annotations

import random
from typing import Optional

import numpy as np

from .board import Board
from .piece import Color


def add_garbage(board: Board, rows: int, rng: Optional[random.Random] = None) -> Board:
    """Return a copy of ``board`` with ``rows`` garbage rows pushed in from the bottom.

    The existing stack shifts up by ``rows``; anything pushed above the top row
    is lost.  Each new row is garbage except for one randomly chosen hole.
    The stack moves as one block, so holes stay open under whatever sat
    above them and no new colour group can form.  ``rows`` is clamped to the
    board height.
    """

    rows = max(0, min(int(rows), board.height))
    if rows == 0:
        return board.copy()
    rng = rng or random.Random()

    grid = board.grid
    shifted = np.zeros_like(grid)
    shifted[: board.height - rows] = grid[rows:]
    for row in range(board.height - rows, board.height):
        hole = rng.randrange(board.width)
        shifted[row, :] = Color.GARBAGE
        shifted[row, hole] = Color.EMPTY
    return Board(board.width, board.height, shifted.reshape(-1))


__all__ = ["add_garbage"]
