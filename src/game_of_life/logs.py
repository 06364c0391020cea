import sys
from pathlib import Path

from loguru import logger

from game_of_life.errors import ConfigError


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    """Send logs to stderr at ``level`` and, optionally, everything to a rotating file."""
    try:
        logger.level(level)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"unknown log level {level!r}") from e

    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=level)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, rotation="10 MB", retention="30 days", level="DEBUG")
