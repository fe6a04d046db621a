from __future__ import annotations

from puyo.board import Board
from puyo.config import EngineConfig
from puyo.controller import (
    WALL_KICKS,
    can_move_down,
    hard_drop,
    move_down,
    move_left,
    move_right,
    rotate,
    spawn_piece,
)
from puyo.piece import Color, Piece


def _pair(rotation: int = 0, position=(0, 2)) -> Piece:
    return Piece((Color.RED, Color.BLUE), rotation=rotation, position=position)


def test_spawn_uses_configured_cell() -> None:
    piece = spawn_piece((Color.RED, Color.GREEN))
    assert piece.position == (0, 2)
    assert piece.rotation == 0
    custom = spawn_piece((Color.RED, Color.GREEN), EngineConfig(spawn_column=4))
    assert custom.position == (0, 4)


def test_moves_on_empty_board() -> None:
    board = Board()
    piece = _pair()
    assert move_left(board, piece).position == (0, 1)
    assert move_right(board, piece).position == (0, 3)
    assert move_down(board, piece).position == (1, 2)


def test_blocked_moves_are_no_ops() -> None:
    board = Board()
    at_wall = _pair(position=(0, 0))
    assert move_left(board, at_wall) == at_wall

    board.set_cell(2, 2, Color.GREEN)
    piece = _pair()
    assert move_down(board, piece) == piece
    assert not can_move_down(board, piece)


def test_moving_into_occupied_cell_is_rejected() -> None:
    board = Board()
    board.set_cell(1, 3, Color.GREEN)
    piece = _pair()
    assert move_right(board, piece) is piece


def test_hard_drop_rests_on_stack() -> None:
    board = Board()
    assert hard_drop(board, _pair()).position == (10, 2)
    board.set_cell(11, 2, Color.GREEN)
    board.set_cell(10, 2, Color.GREEN)
    assert hard_drop(board, _pair()).position == (8, 2)
    flat = _pair(rotation=1)
    assert hard_drop(board, flat).position == (9, 2)


def test_rotation_twice_restores_layout() -> None:
    board = Board()
    piece = _pair(position=(5, 2))
    once = rotate(board, piece)
    assert once is not None
    assert once.rotation == 1 and once.position == (5, 2)
    twice = rotate(board, once)
    assert twice == piece


def test_rotation_kicks_off_right_wall() -> None:
    board = Board()
    piece = _pair(position=(5, 5))
    rotated = rotate(board, piece)
    assert rotated is not None
    assert rotated.rotation == 1
    # +1 would leave the board, -1 is the first kick that fits.
    assert rotated.position == (5, 4)
    assert WALL_KICKS[:2] == (1, -1)


def test_rotation_falls_back_to_left_kick() -> None:
    board = Board()
    board.set_cell(5, 3, Color.GREEN)
    rotated = rotate(board, _pair(position=(5, 2)))
    assert rotated is not None
    # The anchor and the +1 kick both need (5, 3).
    assert rotated.position == (5, 1)


def test_rotation_prefers_right_kick() -> None:
    board = Board()
    board.set_cell(6, 2, Color.GREEN)
    flat = _pair(rotation=1, position=(5, 2))
    rotated = rotate(board, flat)
    assert rotated is not None
    assert rotated.rotation == 0
    # -1 would fit as well.
    assert board.can_place(rotated.moved(-2, 0))
    assert rotated.position == (5, 3)


def test_wall_kick_is_deterministic() -> None:
    board = Board()
    board.set_cell(5, 3, Color.GREEN)
    piece = _pair(position=(5, 2))
    results = {rotate(board, piece) for _ in range(10)}
    assert len(results) == 1


def test_rotation_rejected_when_no_kick_fits() -> None:
    board = Board()
    for row in (10, 11):
        for col in range(board.width):
            if col != 2:
                board.set_cell(row, col, Color.GARBAGE)
    piece = _pair(position=(10, 2))
    assert rotate(board, piece) is None


def test_horizontal_pair_on_floor_cannot_stand_up() -> None:
    board = Board()
    flat = _pair(rotation=1, position=(11, 2))
    assert rotate(board, flat) is None
