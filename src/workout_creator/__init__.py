"""workout-creator: compose workouts from intervals and exercises."""

__version__ = "0.1.0"
