"""Board statistics used by the opponent heuristic and the RL observation.

The helpers accept either a :class:`~puyo.board.Board` or any nested
row-major sequence of colour tags so tests can feed plain lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from .board import Board
from .piece import Color

GridLike = Union[Board, Sequence[Sequence[int]]]


@dataclass(frozen=True)
class BoardFeatures:
    """Summary statistics describing the stack shape."""

    max_height: int
    height_variance: float
    bumpiness: int
    aggregate_height: int
    garbage: int


def _as_array(grid: GridLike) -> np.ndarray:
    if isinstance(grid, Board):
        return grid.grid
    return np.asarray(grid, dtype=np.uint8)


def column_heights(grid: GridLike) -> list[int]:
    arr = _as_array(grid)
    height = arr.shape[0]
    occupied = arr != Color.EMPTY
    top = occupied.argmax(axis=0)
    has_any = occupied.any(axis=0)
    return [int(height - top[c]) if has_any[c] else 0 for c in range(arr.shape[1])]


def height_variance(heights: Sequence[int]) -> float:
    """Population variance of the column heights."""

    if not heights:
        return 0.0
    return float(np.var(np.asarray(heights, dtype=np.float64)))


def bumpiness(heights: Sequence[int]) -> int:
    total = 0
    for col in range(len(heights) - 1):
        total += abs(heights[col] - heights[col + 1])
    return total


def garbage_count(grid: GridLike) -> int:
    return int(np.count_nonzero(_as_array(grid) == Color.GARBAGE))


def board_features(grid: GridLike) -> BoardFeatures:
    heights = column_heights(grid)
    return BoardFeatures(
        max_height=max(heights) if heights else 0,
        height_variance=height_variance(heights),
        bumpiness=bumpiness(heights),
        aggregate_height=sum(heights),
        garbage=garbage_count(grid),
    )


__all__ = [
    "BoardFeatures",
    "GridLike",
    "column_heights",
    "height_variance",
    "bumpiness",
    "garbage_count",
    "board_features",
]
