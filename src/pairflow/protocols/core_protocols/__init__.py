from .base import Labelable
from .cursors import Cursor
from .sources import SplitSource
from .streams import Stream
from .operators import Operator

__all__ = [
    "Labelable",
    "Cursor",
    "SplitSource",
    "Stream",
    "Operator",
]
