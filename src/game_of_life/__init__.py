"""Conway's Game of Life on a finite toroidal grid."""

from game_of_life.errors import (
    ConfigError,
    GameOfLifeError,
    IndexOutOfRange,
    InvalidCellValue,
    InvalidDimension,
    InvalidPatternLength,
    PatternFileError,
)
from game_of_life.model import ChangeSet, Model
from game_of_life.model_np import ModelNP

__all__ = [
    "ChangeSet",
    "ConfigError",
    "GameOfLifeError",
    "IndexOutOfRange",
    "InvalidCellValue",
    "InvalidDimension",
    "InvalidPatternLength",
    "Model",
    "ModelNP",
    "PatternFileError",
]
