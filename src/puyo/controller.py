"""Movement and rotation of the active pair.

Every function is pure: it takes the board and the current piece and returns
the resulting piece.  A blocked move returns the piece unchanged so a host
can tell whether it moved by comparing poses; a rotation that cannot be
satisfied returns ``None``.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .board import Board
from .config import EngineConfig
from .piece import Color, Piece

# Horizontal offsets tried, in order, when a rotation collides at its anchor.
WALL_KICKS: Tuple[int, ...] = (1, -1, 2, -2)


def spawn_piece(colors: Sequence[Color], config: Optional[EngineConfig] = None) -> Piece:
    """Return a vertical pair at the configured spawn cell."""

    config = config or EngineConfig()
    first, second = colors
    return Piece(
        colors=(Color(first), Color(second)),
        rotation=0,
        position=(config.spawn_row, config.spawn_column),
    )


def can_move(board: Board, piece: Piece, dx: int, dy: int) -> bool:
    """Return ``True`` if ``piece`` can move by ``dx`` and ``dy`` on ``board``.

    Translating the piece must keep both cells inside the board and on empty
    cells.
    """

    for row, col in piece.blocks():
        if not board.is_empty(row + dy, col + dx):
            return False
    return True


def _shift(board: Board, piece: Piece, dx: int, dy: int) -> Piece:
    if can_move(board, piece, dx, dy):
        return piece.moved(dx, dy)
    return piece


def move_left(board: Board, piece: Piece) -> Piece:
    return _shift(board, piece, -1, 0)


def move_right(board: Board, piece: Piece) -> Piece:
    return _shift(board, piece, 1, 0)


def move_down(board: Board, piece: Piece) -> Piece:
    return _shift(board, piece, 0, 1)


def can_move_down(board: Board, piece: Piece) -> bool:
    return can_move(board, piece, 0, 1)


def hard_drop(board: Board, piece: Piece) -> Piece:
    """Return ``piece`` moved down until it rests on the stack or the floor."""

    while can_move_down(board, piece):
        piece = piece.moved(0, 1)
    return piece


def rotate(board: Board, piece: Piece) -> Optional[Piece]:
    """Toggle ``piece`` between its vertical and horizontal layouts.

    The rotated layout is tried at the current anchor first and then shifted
    by each offset in :data:`WALL_KICKS`.  The first pose that fits is
    returned; ``None`` means the rotation is rejected and the caller keeps
    the previous piece.
    """

    rotated = piece.rotated()
    if board.can_place(rotated):
        return rotated
    for kick in WALL_KICKS:
        kicked = rotated.moved(kick, 0)
        if board.can_place(kicked):
            return kicked
    return None


__all__ = [
    "WALL_KICKS",
    "spawn_piece",
    "can_move",
    "move_left",
    "move_right",
    "move_down",
    "can_move_down",
    "hard_drop",
    "rotate",
]
