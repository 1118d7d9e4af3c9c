"""
Traversal characteristics and the rules for combining two of them.

A characteristic is a guarantee a split source makes about its traversal.
The merge rules below describe what still holds when two traversals are
walked in lockstep and their elements are paired up.
"""

import enum
import math
from typing import Final


class Characteristic(enum.Flag):
    ORDERED = enum.auto()
    DISTINCT = enum.auto()
    SORTED = enum.auto()
    SIZED = enum.auto()
    NONNULL = enum.auto()
    IMMUTABLE = enum.auto()
    CONCURRENT = enum.auto()
    SUBSIZED = enum.auto()


NO_CHARACTERISTICS: Final = Characteristic(0)

Size = int | float

# math.inf compares greater than any finite size, so min() saturates towards
# the finite side and inf vs inf stays inf
UNKNOWN_SIZE: Final[float] = math.inf


def is_unknown_size(size: Size) -> bool:
    return size == UNKNOWN_SIZE


def check_size(size: Size) -> Size:
    """Validate a size estimate: a non-negative int, or UNKNOWN_SIZE."""
    if is_unknown_size(size):
        return UNKNOWN_SIZE
    if isinstance(size, bool) or not isinstance(size, int):
        raise TypeError(f"Size must be an int or UNKNOWN_SIZE, got {size!r}")
    if size < 0:
        raise ValueError(f"Size must be non-negative, got {size}")
    return size


def with_size(characteristics: Characteristic, size: Size) -> Characteristic:
    """
    Force SIZED and SUBSIZED on when `size` is finite and off when it is unknown.
    """
    sized = Characteristic.SIZED | Characteristic.SUBSIZED
    if is_unknown_size(size):
        return characteristics & ~sized
    return characteristics | sized


def merge_sizes(size1: Size, size2: Size) -> Size:
    """
    Size of a lockstep traversal over two sources: the smaller of the two.

    UNKNOWN_SIZE loses to any finite size; two unknown sizes stay unknown.
    """
    return min(check_size(size1), check_size(size2))


def merge_characteristics(
    c1: Characteristic,
    c2: Characteristic,
    size1: Size,
    size2: Size,
) -> Characteristic:
    """
    Characteristics of a traversal that pairs up the elements of two others.

    - ORDERED, IMMUTABLE: only when both sides have it
    - DISTINCT: when either side has it, since one distinct coordinate already
      makes the pairs distinct
    - SORTED: never, there is no ordering over pairs
    - NONNULL: always, the pair itself is never None
    - CONCURRENT: when both sides have it, or one side has it and the other
      is IMMUTABLE
    - SIZED, SUBSIZED: exactly when the merged size is finite, whatever the
      individual sources declared

    Args:
        c1: Characteristics of the first source
        c2: Characteristics of the second source
        size1: Estimated size of the first source
        size2: Estimated size of the second source

    Returns:
        Characteristic: The merged flag set
    """
    both = c1 & c2
    merged = both & (Characteristic.ORDERED | Characteristic.IMMUTABLE)
    merged |= (c1 | c2) & Characteristic.DISTINCT
    merged |= Characteristic.NONNULL

    if Characteristic.CONCURRENT in both:
        merged |= Characteristic.CONCURRENT
    elif Characteristic.CONCURRENT in c1:
        if Characteristic.IMMUTABLE in c2:
            merged |= Characteristic.CONCURRENT
    elif Characteristic.CONCURRENT in c2:
        if Characteristic.IMMUTABLE in c1:
            merged |= Characteristic.CONCURRENT

    merged |= both & (Characteristic.SIZED | Characteristic.SUBSIZED)
    return with_size(merged, merge_sizes(size1, size2))


def describe(characteristics: Characteristic) -> str:
    """Render a flag set as e.g. 'ORDERED|SIZED', or 'NONE' when empty."""
    names = [member.name for member in Characteristic if member in characteristics]
    return "|".join(names) if names else "NONE"
