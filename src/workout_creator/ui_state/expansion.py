"""Expansion state for lists of expandable rows.

Which rows are expanded is tracked by item identity, never by position, so
inserting, removing or reordering items leaves every other row's state
alone. Identities that vanish from the list simply never match a displayed
row again.

Example::

    state = ExpansionState()
    rows = ExpandableList(workout.intervals, state=state)
    for interval, index, expanded in rows.rows():
        if expanded.is_expanded:
            ...
"""

from operator import attrgetter
from typing import Callable, Generic, Hashable, Iterable, Iterator, MutableSequence, TypeVar

from ..errors import StaleBindingError

ID = TypeVar("ID", bound=Hashable)
Item = TypeVar("Item")

by_id: Callable[[object], Hashable] = attrgetter("id")


class ExpansionState(Generic[ID]):
    """The set of expanded identities."""

    def __init__(self, initially_expanded: Iterable[ID] = ()):
        self._expanded: set[ID] = set(initially_expanded)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._expanded

    def __len__(self) -> int:
        return len(self._expanded)

    @property
    def expanded_ids(self) -> frozenset[ID]:
        """Snapshot of the expanded identities."""
        return frozenset(self._expanded)

    def is_expanded(self, item_id: ID) -> bool:
        """Check whether an item is expanded."""
        return item_id in self._expanded

    def set_expanded(self, item_id: ID, expanded: bool) -> None:
        """Expand or collapse an item."""
        if expanded:
            self._expanded.add(item_id)
        else:
            self._expanded.discard(item_id)

    def toggle(self, item_id: ID) -> bool:
        """Flip an item's state and return the new one."""
        expanded = item_id not in self._expanded
        self.set_expanded(item_id, expanded)
        return expanded

    def expand_all(self, item_ids: Iterable[ID]) -> None:
        """Expand every given item (others keep their state)."""
        self._expanded.update(item_ids)

    def collapse_all(self) -> None:
        """Collapse everything."""
        self._expanded.clear()

    def prune(self, live_ids: Iterable[ID]) -> int:
        """Forget identities that are no longer displayed.

        Returns:
            Number of identities dropped
        """
        before = len(self._expanded)
        self._expanded.intersection_update(live_ids)
        return before - len(self._expanded)

    def handle(self, item_id: ID) -> "ExpansionHandle[ID]":
        """Get a live read/write view of one item's state."""
        return ExpansionHandle(self, item_id)


class ExpansionHandle(Generic[ID]):
    """Read/write view of a single item's expansion flag.

    Reads and writes always go to the shared state, so a handle never
    drifts out of sync with it.
    """

    __slots__ = ("_state", "item_id")

    def __init__(self, state: ExpansionState[ID], item_id: ID):
        self._state = state
        self.item_id = item_id

    @property
    def is_expanded(self) -> bool:
        return self._state.is_expanded(self.item_id)

    @is_expanded.setter
    def is_expanded(self, expanded: bool) -> None:
        self._state.set_expanded(self.item_id, expanded)

    def toggle(self) -> bool:
        """Flip the flag and return the new value."""
        return self._state.toggle(self.item_id)

    def __bool__(self) -> bool:
        return self.is_expanded

    def __repr__(self) -> str:
        return f"ExpansionHandle({self.item_id!r}, expanded={self.is_expanded})"


class ItemBinding(Generic[Item]):
    """Live handle to one item of a changing collection.

    The item is looked up by identity on every read and write. A binding
    whose item has left the collection raises :class:`StaleBindingError`
    instead of touching whatever now sits at the old position.

    ``source`` is the sequence itself or a getter returning it. A getter
    must return the live sequence, not a sorted or filtered copy, or
    :meth:`set` writes into the copy.
    """

    def __init__(
        self,
        source: Callable[[], MutableSequence[Item]] | MutableSequence[Item],
        item_id: Hashable,
        key: Callable[[Item], Hashable] = by_id,
    ):
        self._source = source
        self.item_id = item_id
        self._key = key

    def _items(self) -> MutableSequence[Item]:
        if callable(self._source):
            return self._source()
        return self._source

    def _index(self, items: MutableSequence[Item]) -> int | None:
        for index, item in enumerate(items):
            if self._key(item) == self.item_id:
                return index
        return None

    @property
    def exists(self) -> bool:
        """Whether the item is still in the collection."""
        return self._index(self._items()) is not None

    def get(self) -> Item:
        """Get the current item.

        Raises:
            StaleBindingError: If the item is gone
        """
        items = self._items()
        index = self._index(items)
        if index is None:
            raise StaleBindingError(self.item_id)
        return items[index]

    def set(self, value: Item) -> None:
        """Replace the item in place, wherever it currently sits.

        Raises:
            StaleBindingError: If the item is gone
            ValueError: If ``value`` has a different identity
        """
        if self._key(value) != self.item_id:
            raise ValueError(
                f"Cannot replace item {self.item_id!r} with item {self._key(value)!r}"
            )
        items = self._items()
        index = self._index(items)
        if index is None:
            raise StaleBindingError(self.item_id)
        items[index] = value


def binding_for(
    source: Callable[[], MutableSequence[Item]] | MutableSequence[Item],
    item_id: Hashable,
    key: Callable[[Item], Hashable] = by_id,
) -> ItemBinding[Item] | None:
    """Create a binding for an item, or None if it is not in the collection."""
    binding = ItemBinding(source, item_id, key)
    if not binding.exists:
        return None
    return binding


class ExpandableList(Generic[Item]):
    """Items plus the expansion state of their rows.

    The item sequence can be swapped or mutated freely; the state is keyed
    by ``key(item)`` and is never rebuilt from positions.
    """

    def __init__(
        self,
        items: MutableSequence[Item],
        key: Callable[[Item], Hashable] = by_id,
        state: ExpansionState | None = None,
        initially_expanded: Iterable[Hashable] = (),
    ):
        self._items = items
        self.key = key
        self.state = state if state is not None else ExpansionState(initially_expanded)
        if state is not None:
            self.state.expand_all(initially_expanded)

    @property
    def items(self) -> MutableSequence[Item]:
        return self._items

    def set_items(self, items: MutableSequence[Item]) -> None:
        """Point the list at a new item sequence; expansion state is kept."""
        self._items = items

    def rows(self) -> Iterator[tuple[Item, int, ExpansionHandle]]:
        """Yield ``(item, index, expansion handle)`` in display order."""
        for index, item in enumerate(self._items):
            yield item, index, self.state.handle(self.key(item))

    def is_expanded(self, item: Item) -> bool:
        return self.state.is_expanded(self.key(item))

    def toggle(self, item: Item) -> bool:
        return self.state.toggle(self.key(item))

    def expand_all(self) -> None:
        """Expand every item currently in the list."""
        self.state.expand_all(self.key(item) for item in self._items)

    def collapse_all(self) -> None:
        self.state.collapse_all()

    def expanded_items(self) -> list[Item]:
        """Expanded items in display order."""
        return [item for item in self._items if self.is_expanded(item)]

    def binding(self, item_id: Hashable) -> ItemBinding[Item] | None:
        """Live binding to one of the list's items, resolved by identity."""
        return binding_for(lambda: self._items, item_id, self.key)
