"""State helpers for presenting workouts."""

from .expansion import (
    ExpandableList,
    ExpansionHandle,
    ExpansionState,
    ItemBinding,
    binding_for,
)

__all__ = [
    "binding_for",
    "ExpandableList",
    "ExpansionHandle",
    "ExpansionState",
    "ItemBinding",
]
