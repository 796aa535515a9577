"""CLI commands for workout-creator."""

from .example import example
from .init import init
from .workouts import workouts

__all__ = [
    "example",
    "init",
    "workouts",
]
