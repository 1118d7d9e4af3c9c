import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from pairflow.core.pair import Pair
from pairflow.errors import ExhaustedError, InvalidArgumentError, MissingArgumentError
from pairflow.protocols import core_protocols as cp

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)


class CursorBase(ABC, Generic[T]):
    """
    Base class for cursors. Subclasses implement has_more() and advance();
    the iterator protocol is derived from them.
    """

    @abstractmethod
    def has_more(self) -> bool: ...

    @abstractmethod
    def advance(self) -> T: ...

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if not self.has_more():
            raise StopIteration
        return self.advance()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class EmptyCursor(CursorBase[Any]):
    """A cursor over nothing. Use the shared EMPTY_CURSOR instance."""

    def has_more(self) -> bool:
        return False

    def advance(self) -> Any:
        raise ExhaustedError("Cursor is exhausted")


EMPTY_CURSOR = EmptyCursor()


class IteratorCursor(CursorBase[T]):
    """
    Cursor over an arbitrary iterable.

    The iterable is turned into an iterator at the first pull, not at
    construction. Because a Python iterator cannot report whether it has
    more elements without producing one, has_more() reads one element ahead
    and holds it until advance() hands it out.
    """

    _NOTHING = object()

    def __init__(self, iterable: Iterable[T]) -> None:
        self._iterable = iterable
        self._iterator: Iterator[T] | None = None
        self._pending: Any = self._NOTHING
        self._done = False

    def _fill(self) -> None:
        if self._done or self._pending is not self._NOTHING:
            return
        if self._iterator is None:
            self._iterator = iter(self._iterable)
        try:
            self._pending = next(self._iterator)
        except StopIteration:
            self._done = True

    def has_more(self) -> bool:
        self._fill()
        return not self._done

    def advance(self) -> T:
        self._fill()
        if self._done:
            raise ExhaustedError("Cursor is exhausted")
        element, self._pending = self._pending, self._NOTHING
        return element

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._iterable!r})"


class ZippedCursor(CursorBase[Pair[T, U]]):
    """
    Walks two cursors in lockstep and pairs up their elements.

    The zipped cursor owns no elements of its own: has_more() asks both
    sides, advance() pulls the first side and then the second and returns a
    new Pair. Anything either side raises while doing so, including
    ConcurrentModificationError and ExhaustedError, propagates unchanged.

    Both sides are always queried by has_more(), even when the first side
    already reported exhaustion.
    """

    def __init__(self, cursor1: cp.Cursor[T], cursor2: cp.Cursor[U]) -> None:
        if cursor1 is None or cursor2 is None:
            raise MissingArgumentError("Both cursors are required.")
        # the shared empty cursor is stateless, so pairing it with itself is safe
        if cursor1 is cursor2 and cursor1 is not EMPTY_CURSOR:
            raise InvalidArgumentError("Two different cursors are required.")
        self._cursor1 = cursor1
        self._cursor2 = cursor2

    def has_more(self) -> bool:
        more1 = self._cursor1.has_more()
        more2 = self._cursor2.has_more()
        return more1 and more2

    def advance(self) -> Pair[T, U]:
        m1 = self._cursor1.advance()
        m2 = self._cursor2.advance()
        return Pair.of(m1, m2)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._cursor1!r}, {self._cursor2!r})"
