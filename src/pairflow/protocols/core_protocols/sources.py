from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

from pairflow.protocols.core_protocols.cursors import Cursor

if TYPE_CHECKING:
    from pairflow.core.characteristics import Characteristic, Size

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class SplitSource(Protocol[T_co]):
    """
    The traversal handle of a stream: a cursor together with the metadata the
    source declares about it.

    A split source reports an estimated size and a set of characteristics
    (ordered, distinct, sorted, sized, subsized, nonnull, immutable,
    concurrent) describing guarantees of its traversal. It exposes exactly
    one cursor over its lifetime through as_cursor(); the cursor may bind to
    the backing data lazily, at the first pull.

    Split sources may optionally decompose themselves into independently
    traversable halves via try_split(). Sources that cannot be split soundly
    return None and are traversed sequentially only.
    """

    @property
    def characteristics(self) -> "Characteristic":
        """
        Characteristics declared for this traversal.

        Returns:
            Characteristic: Flag set describing the traversal guarantees
        """
        ...

    def has_characteristics(self, flags: "Characteristic") -> bool:
        """
        Check whether all given characteristics are declared.

        Args:
            flags: One or more Characteristic members combined with |

        Returns:
            bool: True if every flag in `flags` is present
        """
        ...

    def estimate_size(self) -> "Size":
        """
        Estimated number of elements remaining.

        Returns:
            int: Exact count when the source is SIZED
            float: UNKNOWN_SIZE when the size is unknown or unbounded
        """
        ...

    def exact_size(self) -> int | None:
        """
        The size when the source is SIZED, otherwise None.
        """
        ...

    def try_split(self) -> "SplitSource[T_co] | None":
        """
        Split off a prefix of this source into a new source.

        Returns:
            SplitSource: A source covering a prefix of the elements
            None: This source cannot be split
        """
        ...

    def as_cursor(self) -> Cursor[T_co]:
        """
        The cursor that walks this source. Repeated calls return the same cursor.
        """
        ...

    def __iter__(self) -> Iterator[T_co]: ...
