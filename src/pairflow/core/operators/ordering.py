from collections.abc import Callable, Iterator
from typing import Any

from pairflow.core.characteristics import Characteristic
from pairflow.core.operators.base import UnaryOperator
from pairflow.core.sources.base import IteratorSource
from pairflow.protocols import core_protocols as cp


class Sorted(UnaryOperator):
    """
    Sort the stream. Sorting is a barrier: the whole upstream is drained at
    the first pull, which never returns for an infinite stream.

    The output is ORDERED. It is also SORTED when sorted by natural order;
    with a key or in reverse the natural-order guarantee no longer holds.
    """

    def __init__(
        self,
        key: Callable[[Any], Any] | None = None,
        reverse: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.key = key
        self.reverse = reverse

    def _sorted_elements(self, cursor: cp.Cursor[Any]) -> Iterator[Any]:
        yield from sorted(cursor, key=self.key, reverse=self.reverse)

    def op_forward(self, stream: cp.Stream[Any]) -> cp.Stream[Any]:
        upstream = stream.split_source()
        characteristics = upstream.characteristics | Characteristic.ORDERED
        if self.key is None and not self.reverse:
            characteristics |= Characteristic.SORTED
        else:
            characteristics &= ~Characteristic.SORTED
        source = IteratorSource(
            self._sorted_elements(upstream.as_cursor()),
            size=upstream.estimate_size(),
            characteristics=characteristics,
        )
        return stream.derive(source)

    def __repr__(self) -> str:
        return f"Sorted(key={self.key!r}, reverse={self.reverse})"


class Unordered(UnaryOperator):
    """Drop the ORDERED guarantee; the elements and their traversal are unchanged."""

    def op_forward(self, stream: cp.Stream[Any]) -> cp.Stream[Any]:
        upstream = stream.split_source()
        source = IteratorSource(
            upstream.as_cursor(),
            size=upstream.estimate_size(),
            characteristics=upstream.characteristics & ~Characteristic.ORDERED,
        )
        return stream.derive(source)
