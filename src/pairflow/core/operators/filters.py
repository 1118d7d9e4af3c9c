from collections.abc import Callable
from typing import Any, TypeVar

from pairflow.core.characteristics import UNKNOWN_SIZE
from pairflow.core.cursors import CursorBase
from pairflow.core.operators.base import UnaryOperator
from pairflow.core.sources.base import IteratorSource
from pairflow.errors import ExhaustedError
from pairflow.protocols import core_protocols as cp

T = TypeVar("T")


class FilteredCursor(CursorBase[T]):
    """
    Yields only the upstream elements accepted by `predicate`.

    has_more() has to find the next accepted element to answer, so it pulls
    upstream elements until one matches and keeps that element for advance().
    """

    _NOTHING = object()

    def __init__(self, upstream: cp.Cursor[T], predicate: Callable[[T], bool]) -> None:
        self._upstream = upstream
        self._predicate = predicate
        self._pending: Any = self._NOTHING

    def has_more(self) -> bool:
        while self._pending is self._NOTHING:
            if not self._upstream.has_more():
                return False
            element = self._upstream.advance()
            if self._predicate(element):
                self._pending = element
        return True

    def advance(self) -> T:
        if not self.has_more():
            raise ExhaustedError("Cursor is exhausted")
        element, self._pending = self._pending, self._NOTHING
        return element


class Filter(UnaryOperator):
    """
    Keep only the elements for which `predicate` returns a truthy value.

    The number of surviving elements is unknown up front, so the output is
    never SIZED. All other characteristics carry over.
    """

    def __init__(self, predicate: Callable[[Any], bool], **kwargs) -> None:
        super().__init__(**kwargs)
        if not callable(predicate):
            raise TypeError("Filter requires a callable predicate")
        self.predicate = predicate

    def op_forward(self, stream: cp.Stream[Any]) -> cp.Stream[Any]:
        upstream = stream.split_source()
        source = IteratorSource(
            FilteredCursor(upstream.as_cursor(), self.predicate),
            size=UNKNOWN_SIZE,
            characteristics=upstream.characteristics,
        )
        return stream.derive(source)
