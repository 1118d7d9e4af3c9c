from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


def _render(member: Any) -> str:
    return "null" if member is None else str(member)


@dataclass(frozen=True, slots=True)
class Pair(Generic[T, U]):
    """
    Immutable container for two values, the element type of zipped streams.

    Either member may be None. Equality and hashing are structural over both
    members, so pairs of hashable members can be collected into sets and used
    as dict keys.

    Examples
    --------
    >>> p = Pair.of(1, "a")
    >>> p.m1, p.m2
    (1, 'a')
    >>> str(Pair.of(None, "b"))
    '(null, b)'
    >>> m1, m2 = p
    """

    m1: T
    m2: U

    @classmethod
    def of(cls, m1: T, m2: U) -> "Pair[T, U]":
        return cls(m1, m2)

    def to_tuple(self) -> tuple[T, U]:
        return (self.m1, self.m2)

    def __iter__(self) -> Iterator[Any]:
        # allows `m1, m2 = pair`
        yield self.m1
        yield self.m2

    def __str__(self) -> str:
        return f"({_render(self.m1)}, {_render(self.m2)})"
