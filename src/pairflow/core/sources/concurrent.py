"""
Thread-safe collections whose streams tolerate modification during traversal.

- CopyOnWriteList: every write replaces the backing tuple, so a traversal
  walks the snapshot it bound to and never sees later writes.
- ConcurrentSortedSet: traversal is weakly consistent; it proceeds in
  ascending order from the last element it returned, observing elements
  added ahead of it and skipping elements removed before it got there.
"""

import logging
import threading
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator, MutableSequence, MutableSet
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from pairflow.core.characteristics import (
    UNKNOWN_SIZE,
    Characteristic,
    Size,
    with_size,
)
from pairflow.core.cursors import CursorBase
from pairflow.core.sources.base import SplitSourceBase
from pairflow.errors import ExhaustedError

if TYPE_CHECKING:
    from pairflow.core.streams import Stream

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CopyOnWriteList(MutableSequence, Generic[T]):
    """
    A thread-safe list that copies its contents on every write.

    Reads and traversals never lock for long: they work on an immutable
    tuple snapshot. Writes are serialized with a lock and publish a new
    snapshot.

    Examples
    --------
    >>> items = CopyOnWriteList([1, 2, 3])
    >>> stream = items.stream()
    >>> items.append(4)          # before traversal: visible
    >>> stream.to_list()
    [1, 2, 3, 4]
    """

    def __init__(self, iterable: Iterable[T] = ()) -> None:
        self._lock = threading.RLock()
        self._items: tuple[T, ...] = tuple(iterable)

    def snapshot(self) -> tuple[T, ...]:
        return self._items

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> "CopyOnWriteList[T]": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return CopyOnWriteList(self._items[index])
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        with self._lock:
            items = list(self._items)
            items[index] = value
            self._items = tuple(items)

    def __delitem__(self, index) -> None:
        with self._lock:
            items = list(self._items)
            del items[index]
            self._items = tuple(items)

    def insert(self, index: int, value: T) -> None:
        with self._lock:
            items = list(self._items)
            items.insert(index, value)
            self._items = tuple(items)

    # the MutableSequence mixins read and write in separate steps, so every
    # read-modify-write is redone here under the lock

    def append(self, value: T) -> None:
        with self._lock:
            self._items = self._items + (value,)

    def extend(self, values: Iterable[T]) -> None:
        values = tuple(values)
        with self._lock:
            self._items = self._items + values

    def __iadd__(self, values: Iterable[T]) -> "CopyOnWriteList[T]":
        self.extend(values)
        return self

    def pop(self, index: int = -1) -> T:
        with self._lock:
            items = list(self._items)
            value = items.pop(index)
            self._items = tuple(items)
            return value

    def remove(self, value: T) -> None:
        with self._lock:
            items = list(self._items)
            items.remove(value)
            self._items = tuple(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CopyOnWriteList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return list(self._items) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._items)!r})"

    def source(self) -> "SnapshotSource[T]":
        return SnapshotSource(self)

    def stream(self) -> "Stream[T]":
        from pairflow.core.streams import from_source

        return from_source(self.source())


class SnapshotCursor(CursorBase[T]):
    """Cursor over the snapshot a CopyOnWriteList holds at the first pull."""

    def __init__(self, items: CopyOnWriteList[T]) -> None:
        self._items = items
        self._snapshot: tuple[T, ...] | None = None
        self._position = 0

    def _bind(self) -> tuple[T, ...]:
        if self._snapshot is None:
            self._snapshot = self._items.snapshot()
        return self._snapshot

    def remaining(self) -> int:
        if self._snapshot is None:
            return len(self._items)
        return len(self._snapshot) - self._position

    def has_more(self) -> bool:
        return self._position < len(self._bind())

    def advance(self) -> T:
        snapshot = self._bind()
        if self._position >= len(snapshot):
            raise ExhaustedError("Cursor is exhausted")
        element = snapshot[self._position]
        self._position += 1
        return element


class SnapshotSource(SplitSourceBase[T]):
    def __init__(self, items: CopyOnWriteList[T]) -> None:
        self._cursor = SnapshotCursor(items)
        self._characteristics = with_size(
            Characteristic.ORDERED | Characteristic.IMMUTABLE, 0
        )

    @property
    def characteristics(self) -> Characteristic:
        return self._characteristics

    def estimate_size(self) -> Size:
        return self._cursor.remaining()

    def as_cursor(self) -> SnapshotCursor[T]:
        return self._cursor


class ConcurrentSortedSet(MutableSet, Generic[T]):
    """
    A thread-safe set that keeps its elements in ascending order.

    Elements must be mutually comparable; None is rejected. Membership and
    traversal use binary search over a sorted list guarded by a lock.

    Examples
    --------
    >>> letters = ConcurrentSortedSet(["c", "a", "b"])
    >>> list(letters)
    ['a', 'b', 'c']
    """

    def __init__(self, iterable: Iterable[T] = ()) -> None:
        self._lock = threading.RLock()
        self._items: list[T] = []
        for element in iterable:
            self.add(element)

    def __contains__(self, element: object) -> bool:
        if element is None:
            return False
        with self._lock:
            index = bisect_left(self._items, element)  # type: ignore[arg-type]
            return index < len(self._items) and self._items[index] == element

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return WeaklyConsistentCursor(self)

    def add(self, element: T) -> None:
        if element is None:
            raise TypeError("ConcurrentSortedSet does not accept None")
        with self._lock:
            index = bisect_left(self._items, element)  # type: ignore[arg-type]
            if index == len(self._items) or self._items[index] != element:
                self._items.insert(index, element)

    def discard(self, element: T) -> None:
        if element is None:
            return
        with self._lock:
            index = bisect_left(self._items, element)  # type: ignore[arg-type]
            if index < len(self._items) and self._items[index] == element:
                del self._items[index]

    def pop(self) -> T:
        """Remove and return the smallest element."""
        with self._lock:
            if not self._items:
                raise KeyError("pop from an empty ConcurrentSortedSet")
            return self._items.pop(0)

    def first(self) -> T | None:
        with self._lock:
            return self._items[0] if self._items else None

    def higher(self, element: T) -> T | None:
        """The smallest element strictly greater than `element`, or None."""
        with self._lock:
            index = bisect_right(self._items, element)  # type: ignore[arg-type]
            return self._items[index] if index < len(self._items) else None

    def __repr__(self) -> str:
        with self._lock:
            return f"{self.__class__.__name__}({self._items!r})"

    def source(self) -> "ConcurrentSortedSetSource[T]":
        return ConcurrentSortedSetSource(self)

    def stream(self) -> "Stream[T]":
        from pairflow.core.streams import from_source

        return from_source(self.source())


class WeaklyConsistentCursor(CursorBase[T]):
    """
    Ascending cursor over a ConcurrentSortedSet that never fails on
    concurrent modification.

    The cursor only remembers the last element it returned; each pull looks
    up the next greater element in the live set.
    """

    _START = object()

    def __init__(self, items: ConcurrentSortedSet[T]) -> None:
        self._items = items
        self._last: Any = self._START

    def _peek(self) -> T | None:
        if self._last is self._START:
            return self._items.first()
        return self._items.higher(self._last)

    def has_more(self) -> bool:
        return self._peek() is not None

    def advance(self) -> T:
        element = self._peek()
        if element is None:
            raise ExhaustedError("Cursor is exhausted")
        self._last = element
        return element


class ConcurrentSortedSetSource(SplitSourceBase[T]):
    def __init__(self, items: ConcurrentSortedSet[T]) -> None:
        self._cursor = WeaklyConsistentCursor(items)
        # the size of a concurrently modified set is only ever an estimate
        self._characteristics = with_size(
            Characteristic.ORDERED
            | Characteristic.DISTINCT
            | Characteristic.SORTED
            | Characteristic.NONNULL
            | Characteristic.CONCURRENT,
            UNKNOWN_SIZE,
        )

    @property
    def characteristics(self) -> Characteristic:
        return self._characteristics

    def estimate_size(self) -> Size:
        return UNKNOWN_SIZE

    def as_cursor(self) -> WeaklyConsistentCursor[T]:
        return self._cursor
