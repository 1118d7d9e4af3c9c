"""
Functions that create streams from values, collections, generators and
columnar data.
"""

import logging
from collections.abc import Callable, Collection, Iterable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar

from pairflow.config import Config
from pairflow.core.characteristics import (
    NO_CHARACTERISTICS,
    UNKNOWN_SIZE,
    Characteristic,
    Size,
)
from pairflow.core.sources.arrow_column_source import ArrowColumnSource
from pairflow.core.sources.base import EMPTY_SOURCE, IteratorSource
from pairflow.core.sources.collection_source import CollectionSource
from pairflow.core.sources.concurrent import ConcurrentSortedSet, CopyOnWriteList
from pairflow.core.streams.base import Stream
from pairflow.protocols import core_protocols as cp

if TYPE_CHECKING:
    import polars as pl
    import pyarrow as pa

T = TypeVar("T")

logger = logging.getLogger(__name__)


def from_source(
    source: cp.SplitSource[T],
    parallel: bool = False,
    label: str | None = None,
    pairflow_config: Config | None = None,
) -> Stream[T]:
    """Create a stream over an existing split source."""
    if source is None:
        raise TypeError("from_source requires a split source, got None")
    return Stream(source, parallel=parallel, label=label, pairflow_config=pairflow_config)


def empty(pairflow_config: Config | None = None) -> Stream[Any]:
    return from_source(EMPTY_SOURCE, pairflow_config=pairflow_config)


def of(*values: T, pairflow_config: Config | None = None) -> Stream[T]:
    """
    Create an ordered, sized stream over the given values.

    Examples:
        >>> of(1, 2, 3).to_list()
        [1, 2, 3]
    """
    return from_collection(values, pairflow_config=pairflow_config)


def from_collection(
    collection: Collection[T],
    characteristics: Characteristic | None = None,
    pairflow_config: Config | None = None,
) -> Stream[T]:
    """
    Create a stream over a sized collection without copying it.

    The stream binds to the collection at the first pull, so changes made
    before then are seen. Builtin collections are fail-fast afterwards;
    CopyOnWriteList and ConcurrentSortedSet stream with their own
    concurrency-safe sources.
    """
    if isinstance(collection, (CopyOnWriteList, ConcurrentSortedSet)):
        source: cp.SplitSource[T] = collection.source()
    else:
        source = CollectionSource(
            collection,
            characteristics=characteristics,
            pairflow_config=pairflow_config,
        )
    return from_source(source, pairflow_config=pairflow_config)


def from_iterable(
    iterable: Iterable[T],
    characteristics: Characteristic | None = None,
    size: Size | None = None,
    pairflow_config: Config | None = None,
) -> Stream[T]:
    """
    Create a stream over any iterable, including generators and iterators.

    Nothing is known about an arbitrary iterable, so the stream declares no
    characteristics and an unknown size unless they are given.

    Args:
        iterable: Elements of the stream; iter() is called at the first pull
        characteristics: Declared characteristics of the traversal
        size: Number of elements, if known

    Returns:
        Stream: A stream over the iterable
    """
    if iterable is None:
        raise TypeError("from_iterable requires an iterable, got None")
    source = IteratorSource(
        iterable,
        size=UNKNOWN_SIZE if size is None else size,
        characteristics=NO_CHARACTERISTICS if characteristics is None else characteristics,
    )
    return from_source(source, pairflow_config=pairflow_config)


def _iterate(seed: T, fn: Callable[[T], T]) -> Iterator[T]:
    value = seed
    while True:
        yield value
        value = fn(value)


def iterate(
    seed: T, fn: Callable[[T], T], pairflow_config: Config | None = None
) -> Stream[T]:
    """
    Create an infinite ordered stream of seed, fn(seed), fn(fn(seed)), ...

    Examples:
        >>> iterate(1, lambda x: x * 2).limit(5).to_list()
        [1, 2, 4, 8, 16]
    """
    if not callable(fn):
        raise TypeError("iterate requires a callable")
    return from_iterable(
        _iterate(seed, fn),
        characteristics=Characteristic.ORDERED | Characteristic.IMMUTABLE,
        pairflow_config=pairflow_config,
    )


def _generate(supplier: Callable[[], T]) -> Iterator[T]:
    while True:
        yield supplier()


def generate(supplier: Callable[[], T], pairflow_config: Config | None = None) -> Stream[T]:
    """Create an infinite unordered stream of values returned by supplier()."""
    if not callable(supplier):
        raise TypeError("generate requires a callable")
    return from_iterable(
        _generate(supplier),
        characteristics=Characteristic.IMMUTABLE,
        pairflow_config=pairflow_config,
    )


def from_arrow(
    column: "pa.Array | pa.ChunkedArray", pairflow_config: Config | None = None
) -> Stream[Any]:
    """Create an ordered, sized stream over the Python values of an Arrow column."""
    return from_source(ArrowColumnSource(column), pairflow_config=pairflow_config)


def from_polars(series: "pl.Series", pairflow_config: Config | None = None) -> Stream[Any]:
    return from_source(ArrowColumnSource(series), pairflow_config=pairflow_config)


def as_stream(obj: Any, pairflow_config: Config | None = None) -> cp.Stream[Any]:
    """
    Return obj when it is already a stream, otherwise a new stream over it:
    sized collections through from_collection(), other iterables through
    from_iterable().
    """
    if isinstance(obj, cp.Stream):
        return obj
    if isinstance(obj, Collection):
        return from_collection(obj, pairflow_config=pairflow_config)
    if isinstance(obj, Iterable):
        return from_iterable(obj, pairflow_config=pairflow_config)
    raise TypeError(f"Cannot create a stream from {type(obj).__name__}")
