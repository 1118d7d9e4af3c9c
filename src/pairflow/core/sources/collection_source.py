import logging
from collections.abc import (
    Collection,
    ItemsView,
    Iterator,
    KeysView,
    Mapping,
    Sequence,
    Set,
    ValuesView,
)
from typing import Any, TypeVar

from pairflow.config import Config
from pairflow.core.base import ConfigurableBase
from pairflow.core.characteristics import Characteristic, Size, with_size
from pairflow.core.cursors import CursorBase
from pairflow.core.sources.base import SplitSourceBase
from pairflow.errors import ConcurrentModificationError, ExhaustedError

T = TypeVar("T")

logger = logging.getLogger(__name__)


_IMMUTABLE_SEQUENCES = (tuple, str, bytes, range)


def infer_characteristics(collection: Collection[Any]) -> Characteristic:
    """
    Characteristics of iterating over a builtin collection.

    The result never includes SIZED/SUBSIZED; those are added by the source
    since every collection has a length.
    """
    C = Characteristic
    if isinstance(collection, _IMMUTABLE_SEQUENCES):
        return C.ORDERED | C.IMMUTABLE
    if isinstance(collection, frozenset):
        return C.DISTINCT | C.IMMUTABLE
    # dicts preserve insertion order, so their keys and items views do too
    if isinstance(collection, (Mapping, KeysView, ItemsView)):
        return C.ORDERED | C.DISTINCT
    if isinstance(collection, ValuesView):
        return C.ORDERED
    if isinstance(collection, Set):
        return C.DISTINCT
    if isinstance(collection, Sequence):
        return C.ORDERED
    return Characteristic(0)


class CollectionCursor(CursorBase[T]):
    """
    Fail-fast cursor over a builtin collection.

    The cursor binds to the collection at the first pull: the length observed
    at that moment is the number of elements it will yield. Once bound, any
    change to the collection's length is reported as ConcurrentModificationError
    from the next has_more() or advance() call. Like any fail-fast check this
    is best effort: replacing an element in place goes unnoticed.
    """

    def __init__(self, collection: Collection[T], fail_fast: bool = True) -> None:
        self._collection = collection
        self._fail_fast = fail_fast
        self._iterator: Iterator[T] | None = None
        self._expected_length = 0
        self._position = 0

    @property
    def is_bound(self) -> bool:
        return self._iterator is not None

    def remaining(self) -> int:
        if self._iterator is None:
            return len(self._collection)
        return max(self._expected_length - self._position, 0)

    def _bind(self) -> None:
        if self._iterator is None:
            self._expected_length = len(self._collection)
            self._iterator = iter(self._collection)

    def _check_for_comodification(self) -> None:
        if not self._fail_fast:
            return
        current_length = len(self._collection)
        if current_length != self._expected_length:
            logger.debug(
                f"{type(self._collection).__name__} changed size from "
                f"{self._expected_length} to {current_length} during traversal"
            )
            raise ConcurrentModificationError(
                f"{type(self._collection).__name__} was modified during traversal"
            )

    def has_more(self) -> bool:
        self._bind()
        self._check_for_comodification()
        return self._position < self._expected_length

    def advance(self) -> T:
        self._bind()
        self._check_for_comodification()
        if self._position >= self._expected_length:
            raise ExhaustedError("Cursor is exhausted")
        assert self._iterator is not None
        try:
            element = next(self._iterator)
        except StopIteration as e:
            # only reachable with fail_fast off, after the collection shrank
            raise ExhaustedError("Cursor is exhausted") from e
        except RuntimeError as e:
            # dict and set iterators detect some mutations themselves
            raise ConcurrentModificationError(str(e)) from e
        self._position += 1
        return element

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({type(self._collection).__name__})"


class CollectionSource(ConfigurableBase, SplitSourceBase[T]):
    """
    A split source over a builtin collection (list, tuple, set, dict, ...).

    Characteristics are inferred from the collection type unless given
    explicitly, and are always SIZED. Until traversal begins the estimated
    size follows the live length of the collection, so changes made between
    creating the stream and consuming it are reflected.

    Parameters
    ----------
    collection : Collection
        Backing collection; it is not copied
    characteristics : Characteristic | None, default=None
        Overrides the inferred characteristics
    pairflow_config : Config | None, default=None
        `fail_fast` controls the concurrent modification check

    Examples
    --------
    >>> source = CollectionSource([1, 2, 3])
    >>> source.has_characteristics(Characteristic.ORDERED | Characteristic.SIZED)
    True
    """

    def __init__(
        self,
        collection: Collection[T],
        characteristics: Characteristic | None = None,
        pairflow_config: Config | None = None,
    ) -> None:
        super().__init__(pairflow_config=pairflow_config)
        if not isinstance(collection, Collection):
            raise TypeError(
                f"CollectionSource requires a sized iterable, got {type(collection).__name__}"
            )
        if characteristics is None:
            characteristics = infer_characteristics(collection)
        self._collection = collection
        self._characteristics = with_size(characteristics, 0)
        self._cursor = CollectionCursor(
            collection, fail_fast=self.pairflow_config.fail_fast
        )

    @property
    def characteristics(self) -> Characteristic:
        return self._characteristics

    def estimate_size(self) -> Size:
        return self._cursor.remaining()

    def as_cursor(self) -> CollectionCursor[T]:
        return self._cursor
