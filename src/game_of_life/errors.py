"""Exceptions raised by the Game of Life models and tools."""


class GameOfLifeError(Exception):
    """Base class for every error raised by this package."""


class InvalidDimension(GameOfLifeError, ValueError):
    """Grid dimensions must be positive integers."""


class InvalidPatternLength(GameOfLifeError, ValueError):
    """Seed pattern does not have exactly rows * cols values."""


class InvalidCellValue(GameOfLifeError, ValueError):
    """Seed pattern holds a value other than 0 or 1."""


class IndexOutOfRange(GameOfLifeError, IndexError):
    """Flat cell index outside [0, rows * cols)."""


class PatternFileError(GameOfLifeError, ValueError):
    """A harness pattern file could not be parsed."""


class ConfigError(GameOfLifeError):
    """Configuration file missing or invalid."""
