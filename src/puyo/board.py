"""Board representation for the chain puzzle playfield.

Cells live in a flat ``uint8`` array indexed row-major (``row * width + col``)
with row ``0`` at the top.  The only mutators are :meth:`Board.set_cell`,
:meth:`Board.clear_cell` and :meth:`Board.compact_column`; higher level
operations copy the board first and return the updated copy.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import HEIGHT, WIDTH
from .piece import Color, Piece, VALID_TAGS

Cells = NDArray[np.uint8]


def create_empty_cells(width: int = WIDTH, height: int = HEIGHT) -> Cells:
    """Return a new flat array of empty cells."""

    return np.zeros(width * height, dtype=np.uint8)


class Board:
    """Fixed-size grid of colour tags."""

    def __init__(
        self,
        width: int = WIDTH,
        height: int = HEIGHT,
        cells: Optional[Cells] = None,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        if cells is None:
            cells = create_empty_cells(self.width, self.height)
        elif cells.shape != (self.width * self.height,):
            raise ValueError("Cell array does not match board dimensions")
        self.cells: Cells = cells

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from a list of rows of colour tags.

        Handy for tests and hosts restoring a position.  Every row must have
        the same length and every value must be a valid :class:`Color`.
        """

        if not rows:
            raise ValueError("Grid must have at least one row")
        width = len(rows[0])
        for row in rows:
            if len(row) != width:
                raise ValueError("Grid width mismatch")
            for value in row:
                if int(value) not in VALID_TAGS:
                    raise ValueError(f"Invalid cell tag: {value!r}")
        cells = np.asarray(rows, dtype=np.uint8).reshape(-1)
        return cls(width=width, height=len(rows), cells=cells.copy())

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def grid(self) -> Cells:
        """Return a ``(height, width)`` view of the cells."""

        return self.cells.reshape(self.height, self.width)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def index(self, row: int, col: int) -> int:
        """Return the flat index of ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        if not self.in_bounds(row, col):
            raise IndexError("Cell out of bounds")
        return row * self.width + col

    def get_cell(self, row: int, col: int) -> Color:
        return Color(int(self.cells[self.index(row, col)]))

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied so that
        off-board positions are rejected by collision checks.
        """

        if self.in_bounds(row, col):
            return bool(self.cells[row * self.width + col] == Color.EMPTY)
        return False

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def set_cell(self, row: int, col: int, value: int) -> None:
        """Set the tag at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
            ValueError: If ``value`` is not a valid colour tag.
        """

        if int(value) not in VALID_TAGS:
            raise ValueError(f"Invalid cell tag: {value!r}")
        self.cells[self.index(row, col)] = np.uint8(value)

    def clear_cell(self, row: int, col: int) -> None:
        self.cells[self.index(row, col)] = Color.EMPTY

    def compact_column(self, col: int) -> None:
        """Drop every non-empty cell of ``col`` to the bottom, keeping order."""

        if not 0 <= col < self.width:
            raise IndexError("Column out of bounds")
        column = self.grid[:, col]
        filled = column[column != Color.EMPTY]
        compacted = np.zeros(self.height, dtype=np.uint8)
        if filled.size:
            compacted[self.height - filled.size :] = filled
        self.grid[:, col] = compacted

    # ------------------------------------------------------------------
    # Piece helpers
    # ------------------------------------------------------------------
    def can_place(self, piece: Piece) -> bool:
        """Return ``True`` if every cell of ``piece`` maps to an empty in-bounds cell."""

        return all(self.is_empty(row, col) for row, col in piece.blocks())

    def place(self, piece: Piece) -> "Board":
        """Return a copy of the board with ``piece``'s colours written in.

        Callers must check :meth:`can_place` first; the result is unspecified
        when the piece overlaps locked cells.
        """

        board = self.copy()
        for (row, col), color in piece.cells():
            board.set_cell(row, col, color)
        return board

    def is_top_row_blocked(self, spawn_column: int, spawn_row: int = 0) -> bool:
        """Return ``True`` when the spawn cell is occupied."""

        return not self.is_empty(spawn_row, spawn_column)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def copy(self) -> "Board":
        return Board(self.width, self.height, self.cells.copy())

    def cell_count(self) -> int:
        """Return the number of non-empty cells."""

        return int(np.count_nonzero(self.cells))

    def rows(self) -> List[List[int]]:
        """Return a nested list copy of the cells."""

        return self.grid.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and bool(np.array_equal(self.cells, other.cells))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height}, filled={self.cell_count()})"


__all__ = ["Board", "Cells", "create_empty_cells"]
