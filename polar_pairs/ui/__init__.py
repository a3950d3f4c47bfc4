"""User interface package for the puzzle."""

from .main import (
    LEVEL_ENV_VAR,
    SAVE_ENV_VAR,
    PolarPairsApp,
    UIDirectories,
    main,
    resolve_directories,
    run,
)
from .toolkit import MoveAnimation, PolarPairsUI

__all__ = [
    "LEVEL_ENV_VAR",
    "SAVE_ENV_VAR",
    "UIDirectories",
    "MoveAnimation",
    "PolarPairsApp",
    "PolarPairsUI",
    "main",
    "resolve_directories",
    "run",
]
