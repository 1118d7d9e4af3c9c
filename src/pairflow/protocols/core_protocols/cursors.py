from collections.abc import Iterator
from typing import Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Cursor(Protocol[T_co]):
    """
    A stateful, single-pass position over a sequence of elements.

    Cursors are the lowest level of traversal in pairflow. A cursor does not
    own the collection it walks; it only knows how to report whether another
    element is available and how to step past it. Cursors are also Python
    iterators, so they can be consumed with a plain for-loop, in which case
    exhaustion surfaces as the usual StopIteration.

    Cursor contracts:
    - has_more() never consumes an element and may be called repeatedly
    - advance() is only valid after has_more() returned True
    - structural changes to a backing collection are reported from the next
      has_more()/advance() call, per the cursor's own fail-fast or weakly
      consistent contract
    """

    def has_more(self) -> bool:
        """
        Report whether another element can be pulled.

        Returns:
            bool: True if advance() would return an element

        Raises:
            ConcurrentModificationError: fail-fast cursors whose backing
                collection changed after traversal began
        """
        ...

    def advance(self) -> T_co:
        """
        Pull the next element and move past it.

        Returns:
            The next element

        Raises:
            ExhaustedError: If the cursor has no more elements
            ConcurrentModificationError: fail-fast cursors whose backing
                collection changed after traversal began
        """
        ...

    def __iter__(self) -> Iterator[T_co]: ...

    def __next__(self) -> T_co: ...
