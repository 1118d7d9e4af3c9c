from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

from pairflow.protocols.core_protocols.base import Labelable
from pairflow.protocols.core_protocols.cursors import Cursor
from pairflow.protocols.core_protocols.sources import SplitSource

if TYPE_CHECKING:
    from pairflow.core.characteristics import Characteristic, Size
    from pairflow.core.pair import Pair

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Stream(Labelable, Protocol[T_co]):
    """
    Base protocol for all streams in pairflow.

    A stream is a lazily evaluated, single-use sequence of elements. It is
    backed by a split source and can be traversed at most once: the first
    call that obtains its traversal handle (split_source(), cursor(), iter()
    or any intermediate/terminal operation) marks the stream consumed, and
    every later attempt fails with InvalidStateError.

    Metadata queries (characteristics, estimate_size, is_parallel) never
    consume the stream.

    Intermediate operations return a new stream stage that shares the close
    handlers of the pipeline it was derived from. Streams produced by zip()
    start a fresh pipeline, so closing them never closes their inputs.
    """

    @property
    def characteristics(self) -> "Characteristic":
        """
        Characteristics of the traversal this stream would perform.
        """
        ...

    def has_characteristics(self, flags: "Characteristic") -> bool: ...

    def estimate_size(self) -> "Size":
        """
        Estimated number of elements, or UNKNOWN_SIZE.
        """
        ...

    @property
    def is_parallel(self) -> bool:
        """
        Whether terminal operations may evaluate elements concurrently.
        """
        ...

    @property
    def is_consumed(self) -> bool:
        """
        Whether the traversal handle has already been handed out.
        """
        ...

    def split_source(self) -> SplitSource[T_co]:
        """
        Obtain the traversal handle of this stream.

        This consumes the stream. The returned source still binds to its
        backing data lazily, at the first pull.

        Raises:
            InvalidStateError: If the stream was already consumed or closed
        """
        ...

    def cursor(self) -> Cursor[T_co]:
        """
        Obtain the cursor of this stream's traversal handle. Consumes the stream.
        """
        ...

    def derive(self, source: SplitSource[Any]) -> "Stream[Any]":
        """
        Link a new stage over `source` into this stream's pipeline. Used by
        operators after they obtained this stream's traversal handle.
        """
        ...

    def zip(self, other: "Stream[Any]", label: str | None = None) -> "Stream[Pair]":
        """
        Pair this stream element-wise with another stream, truncating to the
        shorter of the two.
        """
        ...

    def on_close(self, handler: Callable[[], None]) -> "Stream[T_co]":
        """
        Register a handler that runs when this stream pipeline is closed.
        """
        ...

    def close(self) -> None:
        """
        Close this stream pipeline, running its close handlers once.
        """
        ...

    def __iter__(self) -> Iterator[T_co]: ...
