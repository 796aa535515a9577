"""Training method definitions.

A training method is exactly one of three variants, each with its own
payload. The variants are plain immutable values; how they are stored lives
in :mod:`workout_creator.utils.method_codec`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class MethodType(str, Enum):
    """Discriminator values for training methods (stored as-is)."""

    STANDARD = "standard"
    REST_PAUSE = "restPause"
    TIMED = "timed"


@dataclass(frozen=True)
class Standard:
    """Traditional sets within a rep range."""

    min_reps: int
    max_reps: int


@dataclass(frozen=True)
class RestPause:
    """Reach a total rep target using mini-sets with short rests."""

    target_total: int
    min_reps: int = 5
    max_reps: int = 10


@dataclass(frozen=True)
class Timed:
    """Perform the exercise for a fixed duration."""

    seconds: int


TrainingMethod = Union[Standard, RestPause, Timed]

DEFAULT_METHOD = Standard(min_reps=10, max_reps=10)

METHOD_INFO: dict[MethodType, tuple[str, str]] = {
    MethodType.STANDARD: (
        "Standard",
        "Traditional rep ranges with minimum and maximum targets",
    ),
    MethodType.REST_PAUSE: (
        "Rest-Pause",
        "Reach target total reps using multiple mini-sets with short rests",
    ),
    MethodType.TIMED: (
        "Timed",
        "Perform exercise for a specific duration rather than counting reps",
    ),
}


def method_type_of(method: TrainingMethod) -> MethodType:
    """Get the discriminator for a training method."""
    if isinstance(method, Standard):
        return MethodType.STANDARD
    if isinstance(method, RestPause):
        return MethodType.REST_PAUSE
    if isinstance(method, Timed):
        return MethodType.TIMED
    raise TypeError(f"Not a training method: {method!r}")


def badge_text(method: TrainingMethod) -> str:
    """Short label for a training method, e.g. "8-12", "45s" or "RP 50"."""
    if isinstance(method, Standard):
        if method.min_reps == method.max_reps:
            return str(method.min_reps)
        return f"{method.min_reps}-{method.max_reps}"
    if isinstance(method, Timed):
        return f"{method.seconds}s"
    if isinstance(method, RestPause):
        return f"RP {method.target_total}"
    raise TypeError(f"Not a training method: {method!r}")
