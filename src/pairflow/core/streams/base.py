import enum
import functools
import logging
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar

from pairflow.config import Config
from pairflow.core.base import LabeledConfigurableBase
from pairflow.core.characteristics import Characteristic, Size, describe
from pairflow.core.pair import Pair
from pairflow.errors import InvalidStateError
from pairflow.protocols import core_protocols as cp
from pairflow.utils.lazy_module import LazyModule

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl
    import pyarrow as pa
else:
    pa = LazyModule("pyarrow")
    pl = LazyModule("polars")

T = TypeVar("T")

logger = logging.getLogger(__name__)

_MISSING = object()


class StreamState(enum.Enum):
    FRESH = "fresh"
    CONSUMED = "consumed"
    CLOSED = "closed"


class OperatorStreamBaseMixin:
    def map(self, fn: Callable[[Any], Any], label: str | None = None) -> cp.Stream:
        """
        Returns a stream of fn applied to each element of this stream.
        """
        from pairflow.core.operators import Map

        return Map(fn, pairflow_config=self.pairflow_config)(self, label=label)  # type: ignore

    def filter(
        self, predicate: Callable[[Any], bool], label: str | None = None
    ) -> cp.Stream:
        """
        Returns a stream of the elements of this stream that satisfy predicate.
        """
        from pairflow.core.operators import Filter

        return Filter(predicate, pairflow_config=self.pairflow_config)(  # type: ignore
            self, label=label
        )

    def peek(self, action: Callable[[Any], Any], label: str | None = None) -> cp.Stream:
        """
        Returns an equivalent stream that calls action on each element as it
        is pulled.
        """
        from pairflow.core.operators import Peek

        return Peek(action, pairflow_config=self.pairflow_config)(self, label=label)  # type: ignore

    def skip(self, n: int, label: str | None = None) -> cp.Stream:
        from pairflow.core.operators import Skip

        return Skip(n, pairflow_config=self.pairflow_config)(self, label=label)  # type: ignore

    def limit(self, n: int, label: str | None = None) -> cp.Stream:
        from pairflow.core.operators import Limit

        return Limit(n, pairflow_config=self.pairflow_config)(self, label=label)  # type: ignore

    def sorted(
        self,
        key: Callable[[Any], Any] | None = None,
        reverse: bool = False,
        label: str | None = None,
    ) -> cp.Stream:
        """
        Returns a stream of the elements of this stream in sorted order.
        Every element is read at the first pull.
        """
        from pairflow.core.operators import Sorted

        return Sorted(key=key, reverse=reverse, pairflow_config=self.pairflow_config)(  # type: ignore
            self, label=label
        )

    def unordered(self, label: str | None = None) -> cp.Stream:
        from pairflow.core.operators import Unordered

        return Unordered(pairflow_config=self.pairflow_config)(self, label=label)  # type: ignore

    def zip(self, other: Any, label: str | None = None) -> cp.Stream:
        """
        Pairs this stream element-wise with other, returning a new sequential
        stream of Pair that ends with the shorter of the two.
        Both streams are consumed by this call.
        """
        from pairflow.core.operators import Zip

        return Zip(pairflow_config=self.pairflow_config)(self, other, label=label)  # type: ignore


class Pipeline:
    """
    State shared by all stages linked from the same head stream: the
    parallel flag and the close handlers.
    """

    def __init__(self, parallel: bool = False) -> None:
        self.parallel = parallel
        self.close_handlers: list[Callable[[], None]] = []
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        handlers, self.close_handlers = self.close_handlers, []
        first_error: Exception | None = None
        for handler in handlers:
            try:
                handler()
            except Exception as e:
                logger.warning(f"Close handler {handler!r} failed: {e}")
                if first_error is None:
                    first_error = e
        logger.debug(f"Closed pipeline after running {len(handlers)} close handler(s)")
        if first_error is not None:
            raise first_error


class Stream(OperatorStreamBaseMixin, LabeledConfigurableBase, Generic[T]):
    """
    A single-use, lazily evaluated pipeline stage over a split source.

    Metadata (characteristics, estimate_size(), is_parallel) can be queried
    any number of times. Handing out the traversal handle, whether through
    split_source(), cursor(), iteration, an intermediate operation or a
    terminal operation, consumes the stream; any later attempt raises
    InvalidStateError. Closing a stage closes the whole pipeline it belongs
    to and consumes every stage of it.

    Parameters
    ----------
    source : SplitSource
        Traversal handle backing this stage
    parallel : bool, default=False
        Initial parallel flag of a new pipeline; ignored when `pipeline` is given
    pipeline : Pipeline | None, default=None
        Pipeline to join; a new one is started when None
    """

    def __init__(
        self,
        source: cp.SplitSource[T],
        parallel: bool = False,
        pipeline: Pipeline | None = None,
        label: str | None = None,
        pairflow_config: Config | None = None,
    ) -> None:
        super().__init__(label=label, pairflow_config=pairflow_config)
        self._source = source
        self._pipeline = pipeline if pipeline is not None else Pipeline(parallel)
        self._state = StreamState.FRESH

    def computed_label(self) -> str | None:
        return self._source.__class__.__name__

    @property
    def state(self) -> StreamState:
        if self._pipeline.closed:
            return StreamState.CLOSED
        return self._state

    @property
    def is_consumed(self) -> bool:
        return self.state is not StreamState.FRESH

    @property
    def characteristics(self) -> Characteristic:
        return self._source.characteristics

    def has_characteristics(self, flags: Characteristic) -> bool:
        return flags in self._source.characteristics

    def estimate_size(self) -> Size:
        return self._source.estimate_size()

    @property
    def is_parallel(self) -> bool:
        return self._pipeline.parallel

    def parallel(self) -> Self:
        self._pipeline.parallel = True
        return self

    def sequential(self) -> Self:
        self._pipeline.parallel = False
        return self

    def _consume(self) -> cp.SplitSource[T]:
        if self.is_consumed:
            raise InvalidStateError(f"{self!r} has already been operated upon or closed")
        self._state = StreamState.CONSUMED
        logger.debug(f"Consumed {self!r}")
        return self._source

    def split_source(self) -> cp.SplitSource[T]:
        return self._consume()

    def cursor(self) -> cp.Cursor[T]:
        return self._consume().as_cursor()

    def __iter__(self) -> Iterator[T]:
        return iter(self.cursor())

    def derive(self, source: cp.SplitSource[Any]) -> "Stream[Any]":
        """
        Link a new stage over `source` into this stream's pipeline. The new
        stage shares the parallel flag and the close handlers of this one.
        """
        return Stream(source, pipeline=self._pipeline, pairflow_config=self.pairflow_config)

    def on_close(self, handler: Callable[[], None]) -> Self:
        if not callable(handler):
            raise TypeError("Close handler must be callable")
        if self.is_consumed:
            raise InvalidStateError(f"{self!r} has already been operated upon or closed")
        self._pipeline.close_handlers.append(handler)
        return self

    def close(self) -> None:
        self._pipeline.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    # terminal operations

    def to_list(self) -> list[T]:
        return list(self)

    def to_set(self) -> set[T]:
        return set(self)

    def count(self) -> int:
        return sum(1 for _ in self)

    def reduce(self, fn: Callable[[Any, T], Any], initial: Any = _MISSING) -> Any:
        """
        Fold the elements with fn, starting from initial when given.
        Without initial an empty stream reduces to None.
        """
        cursor = self.cursor()
        if initial is _MISSING:
            if not cursor.has_more():
                return None
            initial = cursor.advance()
        return functools.reduce(fn, cursor, initial)

    def first(self, default: Any = None) -> T | Any:
        """Return the first element, pulling nothing beyond it, or default."""
        cursor = self.cursor()
        if cursor.has_more():
            return cursor.advance()
        return default

    def any_match(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(element) for element in self)

    def all_match(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(element) for element in self)

    def for_each(self, action: Callable[[T], Any]) -> None:
        """
        Call action on every element. On a parallel stream the actions run on a
        thread pool and may complete in any order; the first failure is raised
        once all submitted actions have finished.
        """
        if not self.is_parallel:
            for element in self:
                action(element)
            return

        max_workers = self.pairflow_config.parallel_max_workers
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(action, element) for element in self]
        for future in futures:
            future.result()

    def join_str(self, sep: str = ", ", prefix: str = "", suffix: str = "") -> str:
        return prefix + sep.join(str(element) for element in self) + suffix

    def as_table(self) -> "pa.Table":
        """
        Materialize the stream into a pyarrow Table.

        A stream of Pair becomes two columns (Config.pair_column_names), any
        other stream a single column (Config.value_column_name).
        """
        elements = self.to_list()
        if elements and all(isinstance(element, Pair) for element in elements):
            m1_name, m2_name = self.pairflow_config.pair_column_names
            return pa.table(
                {
                    m1_name: [element.m1 for element in elements],
                    m2_name: [element.m2 for element in elements],
                }
            )
        return pa.table({self.pairflow_config.value_column_name: elements})

    def as_polars_df(self) -> "pl.DataFrame":
        """
        Convert the entire stream to a Polars DataFrame.
        """
        return pl.DataFrame(self.as_table())

    def as_pandas_df(self) -> "pd.DataFrame":
        return self.as_polars_df().to_pandas()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}[{self.label}]"
            f"(state={self.state.name}, characteristics={describe(self.characteristics)})"
        )
