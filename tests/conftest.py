from __future__ import annotations

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI entry points install loguru sinks bound to pytest's captured streams."""
    yield
    logger.remove()
