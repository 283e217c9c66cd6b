from __future__ import annotations

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru():
    # CLI entry points install sinks bound to captured streams
    yield
    logger.remove()
    logger.disable("game_of_life")
