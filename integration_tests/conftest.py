"""Pytest configuration for integration tests."""

import sys

import pytest
from loguru import logger

from workout_creator.config import get_settings


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def data_dir(monkeypatch, tmp_path):
    """Run every command against a scratch data directory."""
    path = tmp_path / "data"
    monkeypatch.setenv("WORKOUT_CREATOR_DATA_DIR", str(path))
    monkeypatch.setenv("WORKOUT_CREATOR_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()
    # The CLI points loguru at the runner's stderr, which is closed afterwards
    logger.remove()
    logger.add(sys.stderr)
