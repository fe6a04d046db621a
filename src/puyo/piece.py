"""Cell colours and the falling pair.

A piece is two coloured cells plus a layout index selecting their relative
offsets.  Pieces are immutable: every movement or rotation returns a new
instance so the caller's previous pose stays valid when an attempt fails.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Tuple

Offsets = Tuple[Tuple[int, int], Tuple[int, int]]


class Color(IntEnum):
    """Tag stored in every board cell.  ``0`` is always empty."""

    EMPTY = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    YELLOW = 4
    PURPLE = 5
    GARBAGE = 6


PLAYABLE_COLORS: Tuple[Color, ...] = (
    Color.RED,
    Color.GREEN,
    Color.BLUE,
    Color.YELLOW,
    Color.PURPLE,
)

VALID_TAGS = frozenset(int(c) for c in Color)


def palette(size: int) -> Tuple[Color, ...]:
    """Return the first ``size`` playable colours."""

    if not 1 <= size <= len(PLAYABLE_COLORS):
        raise ValueError(f"Palette size must be between 1 and {len(PLAYABLE_COLORS)}")
    return PLAYABLE_COLORS[:size]


# Layout 0 stacks the second cell under the first, layout 1 puts it to the
# right.  Offsets are ``(row, col)`` relative to the anchor.
VERTICAL: Offsets = ((0, 0), (1, 0))
HORIZONTAL: Offsets = ((0, 0), (0, 1))
LAYOUTS: Tuple[Offsets, ...] = (VERTICAL, HORIZONTAL)


@dataclass(frozen=True)
class Piece:
    """Active falling pair."""

    colors: Tuple[Color, Color]
    rotation: int = 0
    position: Tuple[int, int] = (0, 0)  # (row, col)

    def __post_init__(self) -> None:
        if len(self.colors) != 2:
            raise ValueError("A piece holds exactly two cells")
        for color in self.colors:
            if color not in PLAYABLE_COLORS:
                raise ValueError(f"Invalid piece colour: {color!r}")
        if self.rotation not in (0, 1):
            raise ValueError("Rotation index must be 0 or 1")

    @property
    def offsets(self) -> Offsets:
        return LAYOUTS[self.rotation]

    @property
    def row(self) -> int:
        return self.position[0]

    @property
    def column(self) -> int:
        return self.position[1]

    @property
    def is_vertical(self) -> bool:
        return self.rotation == 0

    def moved(self, dx: int, dy: int) -> "Piece":
        """Return a copy translated by ``dx`` columns and ``dy`` rows."""

        row, col = self.position
        return replace(self, position=(row + dy, col + dx))

    def rotated(self) -> "Piece":
        """Return a copy in the other layout at the same anchor."""

        return replace(self, rotation=(self.rotation + 1) % len(LAYOUTS))

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global ``(row, col)`` coordinates of both cells."""

        row, col = self.position
        return [(row + dr, col + dc) for dr, dc in self.offsets]

    def cells(self) -> List[Tuple[Tuple[int, int], Color]]:
        """Return ``((row, col), color)`` pairs in colour order."""

        return list(zip(self.blocks(), self.colors))


__all__ = [
    "Color",
    "PLAYABLE_COLORS",
    "VALID_TAGS",
    "palette",
    "VERTICAL",
    "HORIZONTAL",
    "LAYOUTS",
    "Piece",
]
