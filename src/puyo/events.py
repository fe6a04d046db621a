"""Commands accepted from a host loop and events reported back to it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .piece import Piece


class CommandType(str, Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE = "rotate"
    LOCK = "lock"


@dataclass(frozen=True)
class Command:
    player_id: int
    kind: CommandType


@dataclass(frozen=True)
class PieceMoved:
    player_id: int
    piece: Piece


@dataclass(frozen=True)
class RotationRejected:
    player_id: int
    piece: Piece


@dataclass(frozen=True)
class ChainResolved:
    player_id: int
    cascade_depth: int
    score_delta: int
    garbage_rows_for_opponent: int


@dataclass(frozen=True)
class GarbageDropped:
    """Pending garbage landed on ``player_id``'s board."""

    player_id: int
    rows: int


@dataclass(frozen=True)
class GameOver:
    player_id: int


Event = Union[PieceMoved, RotationRejected, ChainResolved, GarbageDropped, GameOver]


__all__ = [
    "CommandType",
    "Command",
    "PieceMoved",
    "RotationRejected",
    "ChainResolved",
    "GarbageDropped",
    "GameOver",
    "Event",
]
