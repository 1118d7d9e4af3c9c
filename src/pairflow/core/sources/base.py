import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from pairflow.core.characteristics import (
    NO_CHARACTERISTICS,
    UNKNOWN_SIZE,
    Characteristic,
    Size,
    check_size,
    describe,
    is_unknown_size,
    with_size,
)
from pairflow.core.cursors import EMPTY_CURSOR, IteratorCursor
from pairflow.protocols import core_protocols as cp

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SplitSourceBase(ABC, Generic[T]):
    """
    Base class for split sources, the traversal handles streams hand out.

    Subclasses declare their characteristics and size and provide the cursor
    that walks them. Sources are not splittable unless a subclass overrides
    try_split().
    """

    @property
    @abstractmethod
    def characteristics(self) -> Characteristic: ...

    @abstractmethod
    def estimate_size(self) -> Size: ...

    @abstractmethod
    def as_cursor(self) -> cp.Cursor[T]: ...

    def has_characteristics(self, flags: Characteristic) -> bool:
        return flags in self.characteristics

    def exact_size(self) -> int | None:
        if Characteristic.SIZED not in self.characteristics:
            return None
        size = self.estimate_size()
        return None if is_unknown_size(size) else int(size)

    def try_split(self) -> "cp.SplitSource[T] | None":
        return None

    def __iter__(self) -> Iterator[T]:
        return iter(self.as_cursor())

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(size={self.estimate_size()}, "
            f"characteristics={describe(self.characteristics)})"
        )


class IteratorSource(SplitSourceBase[T]):
    """
    A split source over a cursor or any iterable, with metadata supplied by
    the caller.

    SIZED and SUBSIZED are derived from `size`: they are present exactly
    when the size is finite.

    Parameters
    ----------
    elements : Cursor | Iterable
        Cursor to expose as is, or an iterable wrapped in an IteratorCursor
    size : int | float, default=UNKNOWN_SIZE
        Number of elements, or UNKNOWN_SIZE
    characteristics : Characteristic, default=NO_CHARACTERISTICS
        Declared characteristics of the traversal
    """

    def __init__(
        self,
        elements: "cp.Cursor[T] | Iterable[T]",
        size: Size = UNKNOWN_SIZE,
        characteristics: Characteristic = NO_CHARACTERISTICS,
    ) -> None:
        if isinstance(elements, cp.Cursor):
            self._cursor: cp.Cursor[T] = elements
        else:
            self._cursor = IteratorCursor(elements)
        self._size = check_size(size)
        self._characteristics = with_size(characteristics, self._size)

    @property
    def characteristics(self) -> Characteristic:
        return self._characteristics

    def estimate_size(self) -> Size:
        return self._size

    def as_cursor(self) -> cp.Cursor[T]:
        return self._cursor


EMPTY_SOURCE: IteratorSource[Any] = IteratorSource(
    EMPTY_CURSOR,
    size=0,
    characteristics=Characteristic.IMMUTABLE,
)
