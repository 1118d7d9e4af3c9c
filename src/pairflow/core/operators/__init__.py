from .base import BinaryOperator, Operator, UnaryOperator
from .filters import Filter
from .mappers import Map, Peek
from .ordering import Sorted, Unordered
from .slicing import Limit, Skip
from .zip import Zip, zip

__all__ = [
    "Operator",
    "UnaryOperator",
    "BinaryOperator",
    "Map",
    "Peek",
    "Filter",
    "Skip",
    "Limit",
    "Sorted",
    "Unordered",
    "Zip",
    "zip",
]
