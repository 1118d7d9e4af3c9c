from .base import OperatorStreamBaseMixin, Pipeline, Stream, StreamState
from .factories import (
    as_stream,
    empty,
    from_arrow,
    from_collection,
    from_iterable,
    from_polars,
    from_source,
    generate,
    iterate,
    of,
)

__all__ = [
    "Stream",
    "StreamState",
    "Pipeline",
    "OperatorStreamBaseMixin",
    "as_stream",
    "empty",
    "of",
    "from_collection",
    "from_iterable",
    "from_source",
    "iterate",
    "generate",
    "from_arrow",
    "from_polars",
]
