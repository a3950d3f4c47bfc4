"""Polar Pairs puzzle package."""

from .game import (
    CellKind,
    Character,
    Direction,
    Grid,
    Level,
    LevelError,
    LevelLoader,
    MovementResolver,
    PuzzleGame,
    SolutionValidator,
    score_level,
)
from .progress import ProgressStore

__all__ = [
    "CellKind",
    "Character",
    "Direction",
    "Grid",
    "Level",
    "LevelError",
    "LevelLoader",
    "MovementResolver",
    "ProgressStore",
    "PuzzleGame",
    "SolutionValidator",
    "score_level",
]
