"""Data models for workout-creator."""

from .training_method import (
    METHOD_INFO,
    MethodType,
    RestPause,
    Standard,
    Timed,
    TrainingMethod,
    badge_text,
    method_type_of,
)
from .workout import (
    Exercise,
    ExerciseItem,
    Interval,
    Tempo,
    Workout,
    effort_description,
    exercise_sort_key,
    interval_sort_key,
    same_contents,
    same_identity,
)

__all__ = [
    "badge_text",
    "effort_description",
    "Exercise",
    "ExerciseItem",
    "exercise_sort_key",
    "Interval",
    "interval_sort_key",
    "METHOD_INFO",
    "method_type_of",
    "MethodType",
    "RestPause",
    "same_contents",
    "same_identity",
    "Standard",
    "Tempo",
    "Timed",
    "TrainingMethod",
    "Workout",
]
