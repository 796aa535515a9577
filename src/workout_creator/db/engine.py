"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite
from loguru import logger

from ..config import get_settings


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_name


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Catalog entries referenced by exercises (never cascaded)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_items (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                gif_url TEXT
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workouts (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                date_and_time TIMESTAMP NOT NULL,
                total_duration REAL DEFAULT 0
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS intervals (
                id TEXT PRIMARY KEY,
                workout_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                name TEXT,
                rounds INTEGER NOT NULL DEFAULT 1,
                rest_between_rounds INTEGER,
                rest_after_interval INTEGER,
                FOREIGN KEY (workout_id) REFERENCES workouts(id) ON DELETE CASCADE
            )
        """)

        # Training method stored flat: discriminator plus four scalar columns
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                interval_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                exercise_item_id TEXT,
                method_type TEXT NOT NULL DEFAULT 'standard',
                min_reps INTEGER NOT NULL DEFAULT 10,
                max_reps INTEGER NOT NULL DEFAULT 10,
                target_total INTEGER NOT NULL DEFAULT 0,
                seconds INTEGER NOT NULL DEFAULT 30,
                effort INTEGER NOT NULL DEFAULT 7,
                weight REAL,
                rest_after INTEGER,
                tempo_eccentric INTEGER,
                tempo_pause INTEGER,
                tempo_concentric INTEGER,
                notes TEXT,
                FOREIGN KEY (interval_id) REFERENCES intervals(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_item_id) REFERENCES exercise_items(id)
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workouts_date
            ON workouts(date_and_time)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_intervals_workout
            ON intervals(workout_id, position)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercises_interval
            ON exercises(interval_id, position)
        """)

        await db.commit()

    logger.debug(f"Database schema ready at {db_path}")
