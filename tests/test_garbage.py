import random

import numpy as np

from puyo.board import Board
from puyo.features import garbage_count
from puyo.garbage import add_garbage
from puyo.matching import find_matches
from puyo.piece import Color


class FixedHoles:
    """Stand-in RNG that always opens the hole in the same column."""

    def __init__(self, column: int) -> None:
        self.column = column

    def randrange(self, stop: int) -> int:
        return self.column


def test_garbage_rows_have_one_hole_each() -> None:
    board = Board()
    result = add_garbage(board, 2, random.Random(0))
    assert garbage_count(result) == 2 * (board.width - 1)
    assert board.cell_count() == 0
    for row in (10, 11):
        assert np.count_nonzero(result.grid[row] == Color.EMPTY) == 1


def test_existing_stack_is_pushed_up() -> None:
    board = Board()
    board.set_cell(11, 0, Color.RED)
    board.set_cell(11, 1, Color.BLUE)
    result = add_garbage(board, 1, FixedHoles(0))
    assert result.get_cell(10, 0) is Color.RED
    assert result.get_cell(10, 1) is Color.BLUE
    # The hole stays open under the red cell.
    assert result.is_empty(11, 0)
    assert garbage_count(result) == board.width - 1


def test_injection_never_forms_a_group() -> None:
    board = Board()
    for row in (10, 11):
        board.set_cell(row, 0, Color.RED)
        board.set_cell(row, 1, Color.GREEN)
    for row in (8, 9):
        board.set_cell(row, 1, Color.RED)
    assert find_matches(board) == []

    result = add_garbage(board, 1, FixedHoles(1))
    assert find_matches(result) == []
    assert result.is_empty(11, 1)
    assert result.get_cell(10, 1) is Color.GREEN


def test_zero_rows_is_a_copy() -> None:
    board = Board()
    board.set_cell(11, 0, Color.RED)
    result = add_garbage(board, 0)
    assert result == board
    assert result is not board


def test_rows_are_clamped_to_board_height() -> None:
    board = Board()
    board.set_cell(11, 0, Color.RED)
    result = add_garbage(board, 50, random.Random(2))
    assert garbage_count(result) == board.height * (board.width - 1)
    assert not np.any(result.grid == Color.RED)


def test_same_seed_gives_same_holes() -> None:
    board = Board()
    first = add_garbage(board, 3, random.Random(5))
    second = add_garbage(board, 3, random.Random(5))
    assert first == second
