from typing import Any, TypeVar

from pairflow.core.characteristics import is_unknown_size
from pairflow.core.cursors import CursorBase
from pairflow.core.operators.base import UnaryOperator
from pairflow.core.sources.base import IteratorSource
from pairflow.errors import ExhaustedError, InvalidArgumentError
from pairflow.protocols import core_protocols as cp

T = TypeVar("T")


def _check_count(n: int, what: str) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"{what} count must be an int, got {n!r}")
    if n < 0:
        raise InvalidArgumentError(f"{what} count must be non-negative, got {n}")
    return n


class SkipCursor(CursorBase[T]):
    """Discards the first `n` upstream elements at the first pull."""

    def __init__(self, upstream: cp.Cursor[T], n: int) -> None:
        self._upstream = upstream
        self._to_skip = n

    def _skip(self) -> None:
        while self._to_skip > 0 and self._upstream.has_more():
            self._upstream.advance()
            self._to_skip -= 1
        self._to_skip = 0

    def has_more(self) -> bool:
        self._skip()
        return self._upstream.has_more()

    def advance(self) -> T:
        self._skip()
        return self._upstream.advance()


class LimitCursor(CursorBase[T]):
    """
    Hands out at most `n` upstream elements. Once the limit is reached the
    upstream cursor is not touched again.
    """

    def __init__(self, upstream: cp.Cursor[T], n: int) -> None:
        self._upstream = upstream
        self._remaining = n

    def has_more(self) -> bool:
        return self._remaining > 0 and self._upstream.has_more()

    def advance(self) -> T:
        if self._remaining <= 0:
            raise ExhaustedError("Cursor is exhausted")
        element = self._upstream.advance()
        self._remaining -= 1
        return element


class Skip(UnaryOperator):
    """
    Drop the first `n` elements. A known size shrinks by `n` (not below
    zero); an unknown size stays unknown.
    """

    def __init__(self, n: int, **kwargs) -> None:
        super().__init__(**kwargs)
        self.n = _check_count(n, "Skip")

    def op_forward(self, stream: cp.Stream[Any]) -> cp.Stream[Any]:
        upstream = stream.split_source()
        size = upstream.estimate_size()
        if not is_unknown_size(size):
            size = max(size - self.n, 0)
        source = IteratorSource(
            SkipCursor(upstream.as_cursor(), self.n),
            size=size,
            characteristics=upstream.characteristics,
        )
        return stream.derive(source)

    def __repr__(self) -> str:
        return f"Skip({self.n})"


class Limit(UnaryOperator):
    """
    Truncate the stream to its first `n` elements.

    Truncation makes an infinite stream finite in practice, but the size is
    only adjusted when the upstream size is known; an upstream without a
    size keeps reporting UNKNOWN_SIZE.
    """

    def __init__(self, n: int, **kwargs) -> None:
        super().__init__(**kwargs)
        self.n = _check_count(n, "Limit")

    def op_forward(self, stream: cp.Stream[Any]) -> cp.Stream[Any]:
        upstream = stream.split_source()
        size = upstream.estimate_size()
        if not is_unknown_size(size):
            size = min(size, self.n)
        source = IteratorSource(
            LimitCursor(upstream.as_cursor(), self.n),
            size=size,
            characteristics=upstream.characteristics,
        )
        return stream.derive(source)

    def __repr__(self) -> str:
        return f"Limit({self.n})"
