from .config import DEFAULT_CONFIG, Config
from .core import NO_CHARACTERISTICS, UNKNOWN_SIZE, Characteristic, Pair
from .core import streams
from .core import operators
from .core import sources
from .core.operators import zip
from .core.sources import ConcurrentSortedSet, CopyOnWriteList
from .core.streams import (
    Stream,
    StreamState,
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
from . import errors

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "Characteristic",
    "NO_CHARACTERISTICS",
    "UNKNOWN_SIZE",
    "Pair",
    "Stream",
    "StreamState",
    "zip",
    "of",
    "empty",
    "from_collection",
    "from_iterable",
    "from_source",
    "iterate",
    "generate",
    "from_arrow",
    "from_polars",
    "CopyOnWriteList",
    "ConcurrentSortedSet",
    "streams",
    "operators",
    "sources",
    "errors",
]
