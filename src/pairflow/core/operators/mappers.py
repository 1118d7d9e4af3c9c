from collections.abc import Callable
from typing import Any, TypeVar

from pairflow.core.characteristics import Characteristic
from pairflow.core.cursors import CursorBase
from pairflow.core.operators.base import UnaryOperator
from pairflow.core.sources.base import IteratorSource
from pairflow.protocols import core_protocols as cp

T = TypeVar("T")
R = TypeVar("R")


class MappedCursor(CursorBase[R]):
    """Applies a function to each element as it is pulled from the upstream cursor."""

    def __init__(self, upstream: cp.Cursor[T], fn: Callable[[T], R]) -> None:
        self._upstream = upstream
        self._fn = fn

    def has_more(self) -> bool:
        return self._upstream.has_more()

    def advance(self) -> R:
        return self._fn(self._upstream.advance())


class Map(UnaryOperator):
    """
    Transform each element with `fn`.

    The mapped values may repeat, be None or lose any ordering of the
    originals, so SORTED, DISTINCT and NONNULL are dropped. Size and
    ordering of the traversal are preserved.
    """

    def __init__(self, fn: Callable[[Any], Any], **kwargs) -> None:
        super().__init__(**kwargs)
        if not callable(fn):
            raise TypeError("Map requires a callable")
        self.fn = fn

    def op_forward(self, stream: cp.Stream[Any]) -> cp.Stream[Any]:
        upstream = stream.split_source()
        characteristics = upstream.characteristics & ~(
            Characteristic.SORTED | Characteristic.DISTINCT | Characteristic.NONNULL
        )
        source = IteratorSource(
            MappedCursor(upstream.as_cursor(), self.fn),
            size=upstream.estimate_size(),
            characteristics=characteristics,
        )
        return stream.derive(source)

    def __repr__(self) -> str:
        return f"Map({getattr(self.fn, '__name__', self.fn)!s})"


class Peek(UnaryOperator):
    """
    Call `action` on each element as it passes through, leaving the stream unchanged.
    """

    def __init__(self, action: Callable[[Any], Any], **kwargs) -> None:
        super().__init__(**kwargs)
        if not callable(action):
            raise TypeError("Peek requires a callable")
        self.action = action

    def _observe(self, element: Any) -> Any:
        self.action(element)
        return element

    def op_forward(self, stream: cp.Stream[Any]) -> cp.Stream[Any]:
        upstream = stream.split_source()
        source = IteratorSource(
            MappedCursor(upstream.as_cursor(), self._observe),
            size=upstream.estimate_size(),
            characteristics=upstream.characteristics,
        )
        return stream.derive(source)
