"""Workout data models.

A workout owns an ordered list of intervals, and each interval owns an
ordered list of exercises. Deleting a parent deletes everything it owns.
Exercises point at a catalog item they do not own.

Entities hash by ``id`` only, so list diffing sees the same item across
edits. ``==`` compares scalar fields plus the *number* of owned children; it
does not look inside the children. Use :func:`same_identity` when only the
identity matters.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar
from uuid import UUID, uuid4

from ..config import get_settings
from ..errors import CorruptEncodingError
from ..utils.method_codec import FlatMethodFields, construct, decode, encode
from .training_method import MethodType, RestPause, Standard, Timed, TrainingMethod

EFFORT_RANGE = range(1, 11)

EFFORT_DESCRIPTIONS = [
    "Very Light",
    "Light",
    "Light-Moderate",
    "Moderate",
    "Moderate-Hard",
    "Hard",
    "Very Hard",
    "Extremely Hard",
    "Maximum",
    "Maximum+",
]


def effort_description(level: int) -> str:
    """Get the label for an effort level (1-10)."""
    if level not in EFFORT_RANGE:
        raise ValueError(f"Effort must be between 1 and 10, got {level}")
    return EFFORT_DESCRIPTIONS[level - 1]


def _check_effort(effort: int) -> None:
    if effort not in EFFORT_RANGE:
        raise ValueError(f"Effort must be between 1 and 10, got {effort}")


def _check_rounds(rounds: int) -> None:
    if rounds < 1:
        raise ValueError(f"Rounds must be at least 1, got {rounds}")


def _parse_uuid(value: UUID | str | None) -> UUID:
    if value is None:
        return uuid4()
    if isinstance(value, UUID):
        return value
    return UUID(value)


@dataclass(eq=False)
class ExerciseItem:
    """A catalog entry exercises refer to.

    Owned by the exercise catalog; workouts only hold references.
    """

    name: str
    gif_url: str | None = None
    id: UUID = field(default_factory=uuid4)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExerciseItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": str(self.id), "name": self.name, "gif_url": self.gif_url}

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseItem":
        """Create from dictionary."""
        return cls(
            id=_parse_uuid(data.get("id")),
            name=data["name"],
            gif_url=data.get("gif_url"),
        )


@dataclass(frozen=True)
class Tempo:
    """Seconds spent in each phase of a repetition.

    Eccentric is the lowering phase, concentric the lifting phase. A
    concentric of 0 means explosive and renders as ``X``.
    """

    eccentric: int
    pause: int
    concentric: int

    CONTROLLED: ClassVar["Tempo"]
    SLOW: ClassVar["Tempo"]
    EXPLOSIVE: ClassVar["Tempo"]
    PAUSED: ClassVar["Tempo"]

    @property
    def notation(self) -> str:
        """Standard tempo notation, e.g. "3-1-2" or "2-0-X"."""
        concentric = "X" if self.concentric == 0 else str(self.concentric)
        return f"{self.eccentric}-{self.pause}-{concentric}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "eccentric": self.eccentric,
            "pause": self.pause,
            "concentric": self.concentric,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Tempo":
        """Create from dictionary."""
        return cls(
            eccentric=data["eccentric"],
            pause=data["pause"],
            concentric=data["concentric"],
        )


Tempo.CONTROLLED = Tempo(eccentric=2, pause=0, concentric=1)
Tempo.SLOW = Tempo(eccentric=3, pause=1, concentric=2)
Tempo.EXPLOSIVE = Tempo(eccentric=2, pause=0, concentric=0)
Tempo.PAUSED = Tempo(eccentric=2, pause=3, concentric=1)


@dataclass(eq=False)
class Exercise:
    """An exercise slot within an interval.

    The training method is stored flat (``method_type`` plus four integer
    columns) and rebuilt on access through :attr:`training_method`.
    """

    exercise_item: ExerciseItem | None = None
    method_type: str = MethodType.STANDARD.value
    min_reps: int = 10
    max_reps: int = 10
    target_total: int = 0
    seconds: int = 30
    effort: int = 7
    weight: float | None = None
    rest_after: int | None = None  # Seconds
    tempo: Tempo | None = None
    notes: str | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        _check_effort(self.effort)

    @classmethod
    def from_item(
        cls,
        exercise_item: ExerciseItem | None,
        training_method: TrainingMethod | None = None,
        **kwargs,
    ) -> "Exercise":
        """Create an exercise for a catalog item with the given method."""
        exercise = cls(exercise_item=exercise_item, **kwargs)
        if training_method is not None:
            exercise.set_training_method(training_method)
        return exercise

    @property
    def name(self) -> str:
        """Name of the referenced catalog item."""
        if self.exercise_item is None:
            return "Unknown Exercise"
        return self.exercise_item.name

    @property
    def method_fields(self) -> FlatMethodFields:
        """The stored training method columns."""
        return FlatMethodFields(
            method_type=self.method_type,
            min_reps=self.min_reps,
            max_reps=self.max_reps,
            target_total=self.target_total,
            seconds=self.seconds,
        )

    def _store_fields(self, record: FlatMethodFields) -> None:
        self.method_type = record.method_type
        self.min_reps = record.min_reps
        self.max_reps = record.max_reps
        self.target_total = record.target_total
        self.seconds = record.seconds

    @property
    def training_method(self) -> TrainingMethod:
        """The configured training method.

        Raises:
            CorruptEncodingError: If the stored discriminator is unknown
        """
        return decode(self.method_fields)

    @training_method.setter
    def training_method(self, method: TrainingMethod) -> None:
        self.set_training_method(method)

    def set_training_method(
        self,
        method: TrainingMethod,
        *,
        clear_inactive_fields: bool | None = None,
    ) -> None:
        """Store a training method.

        Columns the method does not use keep their values unless
        ``clear_inactive_fields`` is set (defaults to the configured value).
        """
        if clear_inactive_fields is None:
            clear_inactive_fields = get_settings().clear_inactive_fields
        self._store_fields(
            encode(method, self.method_fields, clear_inactive_fields=clear_inactive_fields)
        )

    def switch_method(self, method_type: MethodType | str) -> TrainingMethod:
        """Switch to another method type, reusing the stored values.

        Returns:
            The method the exercise now holds
        """
        method = construct(method_type, self.method_fields)
        self.method_type = MethodType(method_type).value
        return method

    def set_effort(self, effort: int) -> None:
        """Set the expected effort (1-10)."""
        _check_effort(effort)
        self.effort = effort

    def _content_key(self) -> tuple:
        return (
            self.id,
            self.exercise_item.id if self.exercise_item else None,
            self.method_type,
            self.min_reps,
            self.max_reps,
            self.target_total,
            self.seconds,
            self.effort,
            self.weight,
            self.rest_after,
            self.tempo,
            self.notes,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Exercise):
            return NotImplemented
        return self._content_key() == other._content_key()

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: "Exercise") -> bool:
        if not isinstance(other, Exercise):
            return NotImplemented
        return exercise_sort_key(self) < exercise_sort_key(other)

    def to_dict(self) -> dict:
        """Convert to dictionary (flat storage layout)."""
        return {
            "id": str(self.id),
            "exercise_item": self.exercise_item.to_dict() if self.exercise_item else None,
            **self.method_fields.to_dict(),
            "effort": self.effort,
            "weight": self.weight,
            "rest_after": self.rest_after,
            "tempo": self.tempo.to_dict() if self.tempo else None,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary.

        The method columns are taken as stored; an unknown ``method_type``
        only fails once :attr:`training_method` is read.
        """
        item = data.get("exercise_item")
        tempo = data.get("tempo")
        fields = FlatMethodFields.from_dict(data)
        return cls(
            id=_parse_uuid(data.get("id")),
            exercise_item=ExerciseItem.from_dict(item) if item else None,
            method_type=fields.method_type,
            min_reps=fields.min_reps,
            max_reps=fields.max_reps,
            target_total=fields.target_total,
            seconds=fields.seconds,
            effort=data.get("effort", 7),
            weight=data.get("weight"),
            rest_after=data.get("rest_after"),
            tempo=Tempo.from_dict(tempo) if tempo else None,
            notes=data.get("notes"),
        )


@dataclass(eq=False)
class Interval:
    """A block of exercises repeated for a number of rounds."""

    name: str | None = None  # e.g. "Warmup", "Main Set"
    exercises: list[Exercise] = field(default_factory=list)
    rounds: int = 1
    rest_between_rounds: int | None = None
    rest_after_interval: int | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        _check_rounds(self.rounds)

    def set_name(self, name: str | None) -> None:
        """Rename the interval (None clears the name)."""
        self.name = name

    def set_rounds(self, rounds: int) -> None:
        """Set the number of rounds (at least 1)."""
        _check_rounds(rounds)
        self.rounds = rounds

    def append_exercise(self, exercise: Exercise) -> None:
        """Add an exercise at the end of the interval."""
        self.exercises.append(exercise)

    def exercise(self, exercise_id: UUID) -> Exercise:
        """Get an owned exercise by ID.

        Raises:
            KeyError: If the interval has no such exercise
        """
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        raise KeyError(exercise_id)

    def remove_exercise(self, exercise_id: UUID) -> Exercise:
        """Remove an owned exercise by ID and return it.

        Raises:
            KeyError: If the interval has no such exercise
        """
        exercise = self.exercise(exercise_id)
        self.exercises.remove(exercise)
        return exercise

    def _content_key(self) -> tuple:
        return (
            self.id,
            self.name,
            self.rounds,
            self.rest_between_rounds,
            self.rest_after_interval,
            len(self.exercises),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._content_key() == other._content_key()

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: "Interval") -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return interval_sort_key(self) < interval_sort_key(other)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": str(self.id),
            "name": self.name,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "rounds": self.rounds,
            "rest_between_rounds": self.rest_between_rounds,
            "rest_after_interval": self.rest_after_interval,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Interval":
        """Create from dictionary."""
        return cls(
            id=_parse_uuid(data.get("id")),
            name=data.get("name"),
            exercises=[Exercise.from_dict(ex) for ex in data.get("exercises", [])],
            rounds=data.get("rounds", 1),
            rest_between_rounds=data.get("rest_between_rounds"),
            rest_after_interval=data.get("rest_after_interval"),
        )


@dataclass(eq=False)
class Workout:
    """A complete workout."""

    name: str = "Untitled Workout"
    date_and_time: datetime = field(default_factory=datetime.now)
    total_duration: float = 0  # Seconds; set explicitly, never derived
    intervals: list[Interval] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    def set_name(self, name: str) -> None:
        """Rename the workout."""
        self.name = name

    def append_interval(self, interval: Interval) -> None:
        """Add an interval at the end of the workout."""
        self.intervals.append(interval)

    def interval(self, interval_id: UUID) -> Interval:
        """Get an owned interval by ID.

        Raises:
            KeyError: If the workout has no such interval
        """
        for interval in self.intervals:
            if interval.id == interval_id:
                return interval
        raise KeyError(interval_id)

    def remove_interval(self, interval_id: UUID) -> Interval:
        """Remove an owned interval (and its exercises) by ID and return it.

        Raises:
            KeyError: If the workout has no such interval
        """
        interval = self.interval(interval_id)
        self.intervals.remove(interval)
        return interval

    @property
    def exercises(self) -> list[Exercise]:
        """All exercises of the workout in interval order."""
        return [ex for interval in self.intervals for ex in interval.exercises]

    def copy(self) -> "Workout":
        """Deep copy for editing; ids are kept and catalog items are shared."""
        memo = {
            id(ex.exercise_item): ex.exercise_item
            for ex in self.exercises
            if ex.exercise_item is not None
        }
        return copy.deepcopy(self, memo)

    def _content_key(self) -> tuple:
        return (
            self.id,
            self.name,
            self.date_and_time,
            self.total_duration,
            len(self.intervals),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Workout):
            return NotImplemented
        return self._content_key() == other._content_key()

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: "Workout") -> bool:
        # Most recent first
        if not isinstance(other, Workout):
            return NotImplemented
        return self.date_and_time > other.date_and_time

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": str(self.id),
            "name": self.name,
            "date_and_time": self.date_and_time.isoformat(),
            "total_duration": self.total_duration,
            "intervals": [interval.to_dict() for interval in self.intervals],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Create from dictionary."""
        date_and_time = data.get("date_and_time")
        if isinstance(date_and_time, str):
            date_and_time = datetime.fromisoformat(date_and_time)
        return cls(
            id=_parse_uuid(data.get("id")),
            name=data.get("name", "Untitled Workout"),
            date_and_time=date_and_time or datetime.now(),
            total_duration=data.get("total_duration", 0),
            intervals=[Interval.from_dict(i) for i in data.get("intervals", [])],
        )

    def get_summary(self) -> str:
        """Generate a text summary of the workout."""
        summary = f"Workout: {self.name}\n"
        summary += f"Date: {self.date_and_time:%Y-%m-%d %H:%M}\n"
        if self.total_duration:
            summary += f"Duration: {self.total_duration / 60:.0f} min\n"
        summary += "\n"

        for number, interval in enumerate(self.intervals, start=1):
            label = interval.name or f"Interval {number}"
            summary += f"{label} - {interval.rounds} round(s)"
            if interval.rest_between_rounds:
                summary += f", {interval.rest_between_rounds}s rest between rounds"
            summary += ":\n"

            for ex in interval.exercises:
                summary += f"  - {ex.name}: {_format_method(ex)}, effort {ex.effort}\n"

        return summary

    @classmethod
    def make_example(cls) -> "Workout":
        """Build the sample "Full Body Circuit" workout."""
        return cls(
            name="Full Body Circuit",
            intervals=[
                Interval(
                    name="Upper Body Circuit",
                    exercises=[
                        Exercise.from_item(ExerciseItem("Push-ups"), Standard(12, 15)),
                        Exercise.from_item(ExerciseItem("Dips"), Standard(10, 12)),
                    ],
                    rounds=4,
                    rest_between_rounds=60,
                ),
                Interval(
                    name="Core",
                    exercises=[Exercise.from_item(ExerciseItem("Plank"), Timed(60))],
                    rounds=3,
                    rest_between_rounds=30,
                ),
                Interval(
                    name="Pull-up Challenge",
                    exercises=[
                        Exercise.from_item(
                            ExerciseItem("Pull-ups"),
                            RestPause(target_total=50, min_reps=8, max_reps=12),
                        )
                    ],
                ),
                Interval(
                    exercises=[Exercise.from_item(ExerciseItem("Step Ups"), Standard(15, 20))],
                    rounds=5,
                ),
                Interval(
                    exercises=[Exercise.from_item(ExerciseItem("Glute Bridges"), Standard(12, 15))],
                    rounds=5,
                ),
            ],
        )


def _format_method(exercise: Exercise) -> str:
    try:
        method = exercise.training_method
    except CorruptEncodingError:
        return f"unknown method {exercise.method_type!r}"
    if isinstance(method, Standard):
        return f"{method.min_reps}-{method.max_reps} reps"
    if isinstance(method, RestPause):
        return f"rest-pause to {method.target_total} reps"
    return f"{method.seconds}s"


def interval_sort_key(interval: Interval) -> tuple:
    """Name ascending, unnamed intervals last (ordered by id)."""
    if interval.name is None:
        return (1, "", str(interval.id))
    return (0, interval.name, "")


def exercise_sort_key(exercise: Exercise) -> tuple:
    """Effort descending, then name ascending."""
    return (-exercise.effort, exercise.name)


def same_identity(a: object, b: object) -> bool:
    """Check whether two entities are the same item (ids match).

    Objects without an ``id`` are never the same item.
    """
    a_id = getattr(a, "id", None)
    if a_id is None or type(a) is not type(b):
        return False
    return a_id == getattr(b, "id", None)


def same_contents(a: object, b: object) -> bool:
    """Check whether two entities hold the same field values.

    Containers compare child counts only, not the children themselves.
    """
    return type(a) is type(b) and a == b
