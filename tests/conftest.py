"""Shared fixtures for periodgrid tests."""

import pytest
from loguru import logger

from periodgrid.config import get_settings
from periodgrid.engine import PlacementEngine
from periodgrid.grid import TimeGrid


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop cached settings so env overrides in one test don't leak."""
    for name in (
        "PERIODGRID_LOG_LEVEL",
        "PERIODGRID_LOG_FILE",
        "PERIODGRID_LOADED_BLOCK_ID_PREFIX",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def grid():
    return TimeGrid()


@pytest.fixture
def engine(grid):
    return PlacementEngine(grid=grid)


@pytest.fixture
def log_records():
    """Collect loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
