"""Database layer for workout-creator."""

from .engine import get_db_path, init_db
from .store import WorkoutStore

__all__ = [
    "get_db_path",
    "init_db",
    "WorkoutStore",
]
