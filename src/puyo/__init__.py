"""Two-player chain puzzle engine."""

from .piece import Color, Piece, palette
from .board import Board
from .config import Difficulty, EngineConfig, HeuristicWeights, ScoringRules
from .controller import (
    can_move,
    hard_drop,
    move_down,
    move_left,
    move_right,
    rotate,
    spawn_piece,
)
from .gravity import compact
from .matching import MatchGroup, find_matches
from .chain import ChainResult, lock_piece, resolve_chain
from .garbage import add_garbage
from .ai import OpponentController, choose_move, evaluate_board
from .events import (
    ChainResolved,
    Command,
    CommandType,
    GameOver,
    GarbageDropped,
    PieceMoved,
    RotationRejected,
)
from .game_state import PlayerState
from .match import Duel
from .placement_env import PlacementEnv
from .gym_env import PuyoDuelGymEnv
from .utils import format_grid, render_grid

__all__ = [
    "Color",
    "Piece",
    "palette",
    "Board",
    "Difficulty",
    "EngineConfig",
    "HeuristicWeights",
    "ScoringRules",
    "can_move",
    "hard_drop",
    "move_down",
    "move_left",
    "move_right",
    "rotate",
    "spawn_piece",
    "compact",
    "MatchGroup",
    "find_matches",
    "ChainResult",
    "lock_piece",
    "resolve_chain",
    "add_garbage",
    "OpponentController",
    "choose_move",
    "evaluate_board",
    "ChainResolved",
    "Command",
    "CommandType",
    "GameOver",
    "GarbageDropped",
    "PieceMoved",
    "RotationRejected",
    "PlayerState",
    "Duel",
    "PlacementEnv",
    "PuyoDuelGymEnv",
    "format_grid",
    "render_grid",
]
