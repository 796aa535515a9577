"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from loguru import logger

from workout_creator.config import get_settings
from workout_creator.db import init_db
from workout_creator.models.training_method import RestPause, Standard, Timed
from workout_creator.models.workout import (
    Exercise,
    ExerciseItem,
    Interval,
    Tempo,
    Workout,
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Point settings at a scratch data directory and reset the cache."""
    monkeypatch.setenv("WORKOUT_CREATOR_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("WORKOUT_CREATOR_CLEAR_INACTIVE_FIELDS", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """Temporary database with the schema in place."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def sample_workout():
    """Create a sample workout covering every optional field."""
    return Workout(
        name="Push Day",
        date_and_time=datetime(2025, 1, 2, 9, 0),
        total_duration=1800,
        intervals=[
            Interval(
                name="Main Set",
                rounds=3,
                rest_between_rounds=60,
                rest_after_interval=90,
                exercises=[
                    Exercise.from_item(
                        ExerciseItem("Bench Press", gif_url="bench.gif"),
                        Standard(8, 12),
                        effort=8,
                        weight=60.0,
                        rest_after=90,
                        tempo=Tempo.SLOW,
                        notes="Pause at the chest",
                    ),
                    Exercise.from_item(ExerciseItem("Plank"), Timed(45)),
                ],
            ),
            Interval(
                exercises=[Exercise.from_item(ExerciseItem("Pull-ups"), RestPause(target_total=40))],
            ),
        ],
    )
