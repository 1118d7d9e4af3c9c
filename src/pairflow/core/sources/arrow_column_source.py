import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from pairflow.core.characteristics import Characteristic, Size, with_size
from pairflow.core.cursors import IteratorCursor
from pairflow.core.sources.base import SplitSourceBase
from pairflow.utils.lazy_module import LazyModule

if TYPE_CHECKING:
    import polars as pl
    import pyarrow as pa
else:
    pa = LazyModule("pyarrow")

logger = logging.getLogger(__name__)


def _as_chunked_array(column: Any) -> "pa.ChunkedArray":
    if isinstance(column, pa.ChunkedArray):
        return column
    if isinstance(column, pa.Array):
        return pa.chunked_array([column], type=column.type)
    # polars Series (and anything else that can hand over an arrow array)
    to_arrow = getattr(column, "to_arrow", None)
    if callable(to_arrow):
        return _as_chunked_array(to_arrow())
    raise TypeError(
        f"Expected a pyarrow Array/ChunkedArray or a polars Series, got {type(column).__name__}"
    )


class ArrowColumnSource(SplitSourceBase[Any]):
    """
    A split source over a single arrow column.

    Arrow data is immutable, so the traversal is ORDERED, IMMUTABLE and SIZED.
    When the column holds no nulls it is also NONNULL. Values are converted
    to Python objects one chunk at a time, as the cursor reaches each chunk.

    Parameters
    ----------
    column : pa.Array | pa.ChunkedArray | pl.Series
        The column to traverse. polars Series are converted with `to_arrow()`.
    """

    def __init__(self, column: "pa.Array | pa.ChunkedArray | pl.Series") -> None:
        self._column = _as_chunked_array(column)
        characteristics = Characteristic.ORDERED | Characteristic.IMMUTABLE
        if self._column.null_count == 0:
            characteristics |= Characteristic.NONNULL
        self._characteristics = with_size(characteristics, len(self._column))
        self._cursor = IteratorCursor(self._iter_values())

    def _iter_values(self) -> Iterator[Any]:
        for chunk in self._column.chunks:
            yield from chunk.to_pylist()

    @property
    def column(self) -> "pa.ChunkedArray":
        return self._column

    @property
    def characteristics(self) -> Characteristic:
        return self._characteristics

    def estimate_size(self) -> Size:
        return len(self._column)

    def as_cursor(self) -> IteratorCursor[Any]:
        return self._cursor
