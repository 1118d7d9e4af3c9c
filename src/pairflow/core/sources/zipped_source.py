import logging
from typing import TypeVar

from pairflow.core.characteristics import (
    Characteristic,
    Size,
    describe,
    merge_characteristics,
    merge_sizes,
)
from pairflow.core.cursors import ZippedCursor
from pairflow.core.pair import Pair
from pairflow.core.sources.base import EMPTY_SOURCE, SplitSourceBase
from pairflow.errors import InvalidArgumentError, MissingArgumentError
from pairflow.protocols import core_protocols as cp

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)


class ZippedSource(SplitSourceBase[Pair[T, U]]):
    """
    Split source that pairs up the elements of two other split sources.

    Size and characteristics are merged from the two inputs once, when the
    zipped source is created, and never change afterwards. The elements
    themselves are read only when the zipped cursor is pulled.

    An input whose size is still live at that point, such as a collection
    that has not been pulled yet, can grow or shrink before traversal. The
    zipped source keeps reporting the size it merged, SIZED included, while
    the traversal yields whatever the inputs hold when they are pulled. Use
    count() rather than exact_size() when the backing collections may change
    between zip() and traversal.

    Splitting a zip soundly would require re-synchronizing positions on both
    sides, so a zipped source is never split: try_split() returns None and
    the source is traversed sequentially.

    Parameters
    ----------
    source1 : SplitSource
        Traversal handle of the first stream; supplies Pair.m1
    source2 : SplitSource
        Traversal handle of the second stream; supplies Pair.m2
    """

    def __init__(self, source1: cp.SplitSource[T], source2: cp.SplitSource[U]) -> None:
        if source1 is None or source2 is None:
            raise MissingArgumentError("Both split sources are required.")
        if source1 is source2 and source1 is not EMPTY_SOURCE:
            raise InvalidArgumentError("Two different split sources are required.")

        size1, size2 = source1.estimate_size(), source2.estimate_size()
        self._size = merge_sizes(size1, size2)
        self._characteristics = merge_characteristics(
            source1.characteristics, source2.characteristics, size1, size2
        )
        self._cursor: ZippedCursor[T, U] = ZippedCursor(
            source1.as_cursor(), source2.as_cursor()
        )
        logger.debug(
            f"Zipped {source1!r} with {source2!r}: size={self._size}, "
            f"characteristics={describe(self._characteristics)}"
        )

    @property
    def characteristics(self) -> Characteristic:
        return self._characteristics

    def estimate_size(self) -> Size:
        return self._size

    def try_split(self) -> None:
        return None

    def as_cursor(self) -> ZippedCursor[T, U]:
        return self._cursor
