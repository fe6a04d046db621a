"""Utility helpers for hosts and renderers."""

from __future__ import annotations

from typing import Dict, List, Optional

from .board import Board
from .piece import Color, Piece


CELL_CHARS: Dict[int, str] = {
    Color.EMPTY: ".",
    Color.RED: "R",
    Color.GREEN: "G",
    Color.BLUE: "B",
    Color.YELLOW: "Y",
    Color.PURPLE: "P",
    Color.GARBAGE: "#",
}


def render_grid(board: Board, active: Optional[Piece] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    Renderers can draw the single 2D array without mutating the board (i.e.
    without locking the piece).  Cells of the active pair outside the board
    are skipped.
    """

    grid = board.rows()
    if active is not None:
        for (r, c), color in active.cells():
            if board.in_bounds(r, c):
                grid[r][c] = int(color)
    return grid


def format_grid(grid: List[List[int]]) -> str:
    """Return an ASCII picture of ``grid``, one line per row."""

    return "\n".join("".join(CELL_CHARS[value] for value in row) for row in grid)


__all__ = ["CELL_CHARS", "render_grid", "format_grid"]
