"""Connected-group detection.

Groups are found with an explicit work stack so traversal depth never depends
on the board size.  Visited cells are tracked in a boolean array keyed by the
flat cell index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

import numpy as np

from .board import Board
from .config import MIN_MATCH
from .piece import Color

Coordinate = Tuple[int, int]

# Up, down, left, right.  No diagonals.
NEIGHBOURS: Tuple[Coordinate, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class MatchGroup:
    """Connected same-colour cells at or above the clear threshold."""

    color: Color
    cells: FrozenSet[Coordinate]

    def __len__(self) -> int:
        return len(self.cells)


def _seeds_group(value: int) -> bool:
    return value != Color.EMPTY and value != Color.GARBAGE


def _flood(board: Board, start: int, visited: np.ndarray) -> List[int]:
    """Collect the component containing flat index ``start``."""

    width = board.width
    cells = board.cells
    color = cells[start]
    component: List[int] = []
    stack = [start]
    visited[start] = True
    while stack:
        idx = stack.pop()
        component.append(idx)
        row, col = divmod(idx, width)
        for dr, dc in NEIGHBOURS:
            nr, nc = row + dr, col + dc
            if not board.in_bounds(nr, nc):
                continue
            nidx = nr * width + nc
            if visited[nidx] or cells[nidx] != color:
                continue
            visited[nidx] = True
            stack.append(nidx)
    return component


def connected_group(board: Board, row: int, col: int) -> FrozenSet[Coordinate]:
    """Return the same-colour component containing ``(row, col)``.

    Empty and garbage cells belong to no group, so an empty set is returned
    for them.
    """

    start = board.index(row, col)
    if not _seeds_group(int(board.cells[start])):
        return frozenset()
    visited = np.zeros(board.cells.size, dtype=bool)
    return frozenset(divmod(i, board.width) for i in _flood(board, start, visited))


def find_matches(board: Board, threshold: int = MIN_MATCH) -> List[MatchGroup]:
    """Return every connected group of at least ``threshold`` cells.

    Groups are reported in row-major order of their first cell.
    """

    visited = np.zeros(board.cells.size, dtype=bool)
    groups: List[MatchGroup] = []
    for start in range(board.cells.size):
        if visited[start]:
            continue
        value = int(board.cells[start])
        if not _seeds_group(value):
            continue
        component = _flood(board, start, visited)
        if len(component) >= threshold:
            groups.append(
                MatchGroup(
                    color=Color(value),
                    cells=frozenset(divmod(i, board.width) for i in component),
                )
            )
    return groups


__all__ = ["Coordinate", "MatchGroup", "NEIGHBOURS", "connected_group", "find_matches"]
