"""
Minefield game engine.

Provides the mine layout, the player-visible field with its flood fill
and win/loss detection, and a session and RL environment built on them.
"""
from .errors import MinefieldError, InvalidFieldError, OutOfRangeError
from .status import (
    SquareStatus,
    StatusKind,
    COVERED,
    MINE_GUESS,
    QUESTION,
    MINE_REVEALED,
    INCORRECT_GUESS,
    EXPLODED_MINE,
    uncovered,
)
from .field import MineField, FieldConfig, BEGINNER, INTERMEDIATE, EXPERT
from .overlay import VisibleField, GameState
from .session import GameSession
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "MinefieldError",
    "InvalidFieldError",
    "OutOfRangeError",
    "SquareStatus",
    "StatusKind",
    "COVERED",
    "MINE_GUESS",
    "QUESTION",
    "MINE_REVEALED",
    "INCORRECT_GUESS",
    "EXPLODED_MINE",
    "uncovered",
    "MineField",
    "FieldConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "VisibleField",
    "GameState",
    "GameSession",
    "MinesweeperEnv",
    "make_vec_env",
]
