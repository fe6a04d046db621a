"""Engine configuration.

All tunables are plain numbers grouped in frozen dataclasses so a host can
build one :class:`EngineConfig` at start-up and share it between both players.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from math import ceil
from typing import Dict

from .piece import PLAYABLE_COLORS


# Dimensions of the standard playfield.
WIDTH = 6
HEIGHT = 12

MIN_MATCH = 4


@dataclass(frozen=True)
class ScoringRules:
    """Chain scoring curve and garbage conversion.

    Clear pass ``k`` (1-based) is worth ``base_points * chain_power ** k``.
    """

    base_points: int = 100
    chain_power: int = 2
    garbage_row_cost: int = 400

    def __post_init__(self) -> None:
        if self.base_points <= 0:
            raise ValueError("base_points must be positive")
        # Anything <= 1 would break monotonic growth with depth.
        if self.chain_power <= 1:
            raise ValueError("chain_power must be greater than 1")
        if self.garbage_row_cost <= 0:
            raise ValueError("garbage_row_cost must be positive")

    def pass_score(self, depth: int) -> int:
        if depth <= 0:
            return 0
        return self.base_points * self.chain_power ** depth

    def chain_score(self, depth: int) -> int:
        """Return the total score of a chain ``depth`` passes deep."""

        return sum(self.pass_score(k) for k in range(1, depth + 1))

    def garbage_rows(self, score: int) -> int:
        if score <= 0:
            return 0
        return ceil(score / self.garbage_row_cost)


@dataclass(frozen=True)
class HeuristicWeights:
    """Weights of the greedy opponent's board evaluation."""

    chain: float = 1000.0
    max_height: float = 100.0
    height_variance: float = 50.0


@dataclass(frozen=True)
class EngineConfig:
    width: int = WIDTH
    height: int = HEIGHT
    palette_size: int = 4
    match_threshold: int = MIN_MATCH
    spawn_row: int = 0
    spawn_column: int = 2
    attack_meter_max: int = 100
    attack_per_chain: int = 20
    scoring: ScoringRules = field(default_factory=ScoringRules)
    weights: HeuristicWeights = field(default_factory=HeuristicWeights)

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 2:
            raise ValueError("Board must be at least 2x2")
        if not 1 <= self.palette_size <= len(PLAYABLE_COLORS):
            raise ValueError(
                f"palette_size must be between 1 and {len(PLAYABLE_COLORS)}"
            )
        if self.match_threshold < 2:
            raise ValueError("match_threshold must be at least 2")
        # A vertical pair occupies spawn_row and spawn_row + 1.
        if not 0 <= self.spawn_row < self.height - 1:
            raise ValueError("spawn_row outside the board")
        if not 0 <= self.spawn_column < self.width:
            raise ValueError("spawn_column outside the board")


class Difficulty(str, Enum):
    """Opponent difficulty.  Only affects how often the host may ask for a move."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    EXTREME = "extreme"


@dataclass(frozen=True)
class DifficultySettings:
    fall_interval_ms: int
    ai_response_ms: int


DIFFICULTY_SETTINGS: Dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY: DifficultySettings(fall_interval_ms=700, ai_response_ms=1500),
    Difficulty.NORMAL: DifficultySettings(fall_interval_ms=500, ai_response_ms=1000),
    Difficulty.HARD: DifficultySettings(fall_interval_ms=300, ai_response_ms=600),
    Difficulty.EXTREME: DifficultySettings(fall_interval_ms=150, ai_response_ms=300),
}


__all__ = [
    "WIDTH",
    "HEIGHT",
    "MIN_MATCH",
    "ScoringRules",
    "HeuristicWeights",
    "EngineConfig",
    "Difficulty",
    "DifficultySettings",
    "DIFFICULTY_SETTINGS",
]
