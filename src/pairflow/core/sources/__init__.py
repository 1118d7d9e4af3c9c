from .base import SplitSourceBase, IteratorSource, EMPTY_SOURCE
from .collection_source import CollectionSource, CollectionCursor, infer_characteristics
from .arrow_column_source import ArrowColumnSource
from .concurrent import CopyOnWriteList, ConcurrentSortedSet
from .zipped_source import ZippedSource

__all__ = [
    "SplitSourceBase",
    "IteratorSource",
    "EMPTY_SOURCE",
    "CollectionSource",
    "CollectionCursor",
    "infer_characteristics",
    "ArrowColumnSource",
    "CopyOnWriteList",
    "ConcurrentSortedSet",
    "ZippedSource",
]
