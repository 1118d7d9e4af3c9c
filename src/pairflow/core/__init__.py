from .characteristics import NO_CHARACTERISTICS, UNKNOWN_SIZE, Characteristic
from .pair import Pair

__all__ = [
    "Characteristic",
    "NO_CHARACTERISTICS",
    "UNKNOWN_SIZE",
    "Pair",
]
