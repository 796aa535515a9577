"""Flat storage encoding for training methods.

The database holds a training method as a discriminator plus four integer
columns that are always present. Only the columns of the active variant are
meaningful; the others keep whatever they held before, so switching to
another method and back restores the earlier values::

    >>> record = encode(Standard(8, 12))
    >>> record = encode(Timed(45), record)
    >>> construct(MethodType.STANDARD, record)
    Standard(min_reps=8, max_reps=12)

Pass ``clear_inactive_fields=True`` to ``encode`` to reset the unused
columns to their defaults instead.
"""

from dataclasses import asdict, dataclass, replace

from ..errors import CorruptEncodingError
from ..models.training_method import (
    MethodType,
    RestPause,
    Standard,
    Timed,
    TrainingMethod,
    method_type_of,
)


@dataclass(frozen=True)
class FlatMethodFields:
    """Scalar record a training method is stored as.

    The defaults are the "no method set yet" baseline and decode to
    ``Standard(10, 10)``.
    """

    method_type: str = MethodType.STANDARD.value
    min_reps: int = 10
    max_reps: int = 10
    target_total: int = 0
    seconds: int = 30

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "FlatMethodFields":
        """Create from dictionary, defaulting any missing column."""
        defaults = cls()
        return cls(
            method_type=data.get("method_type", defaults.method_type),
            min_reps=data.get("min_reps", defaults.min_reps),
            max_reps=data.get("max_reps", defaults.max_reps),
            target_total=data.get("target_total", defaults.target_total),
            seconds=data.get("seconds", defaults.seconds),
        )


def _parse_method_type(method_type: MethodType | str) -> MethodType:
    try:
        return MethodType(method_type)
    except ValueError:
        raise CorruptEncodingError(method_type) from None


def encode(
    method: TrainingMethod,
    record: FlatMethodFields | None = None,
    *,
    clear_inactive_fields: bool = False,
) -> FlatMethodFields:
    """Project a training method onto a flat record.

    Args:
        method: The method to store
        record: Current stored values. Columns the method does not use are
            carried over from it (or defaulted if None).
        clear_inactive_fields: Reset the unused columns to their defaults
            instead of carrying them over.

    Returns:
        A new record; ``record`` itself is not modified.
    """
    method_type = method_type_of(method)
    base = FlatMethodFields() if record is None or clear_inactive_fields else record

    if isinstance(method, Standard):
        return replace(
            base,
            method_type=method_type.value,
            min_reps=method.min_reps,
            max_reps=method.max_reps,
        )
    if isinstance(method, RestPause):
        return replace(
            base,
            method_type=method_type.value,
            target_total=method.target_total,
            min_reps=method.min_reps,
            max_reps=method.max_reps,
        )
    return replace(base, method_type=method_type.value, seconds=method.seconds)


def construct(method_type: MethodType | str, record: FlatMethodFields) -> TrainingMethod:
    """Build the given variant from a record's current values.

    Raises:
        CorruptEncodingError: If ``method_type`` is not a known discriminator
    """
    kind = _parse_method_type(method_type)

    if kind is MethodType.STANDARD:
        return Standard(min_reps=record.min_reps, max_reps=record.max_reps)
    if kind is MethodType.REST_PAUSE:
        return RestPause(
            target_total=record.target_total,
            min_reps=record.min_reps,
            max_reps=record.max_reps,
        )
    return Timed(seconds=record.seconds)


def decode(record: FlatMethodFields) -> TrainingMethod:
    """Rebuild the training method a record stores.

    Raises:
        CorruptEncodingError: If the record's discriminator is unknown
    """
    return construct(record.method_type, record)
