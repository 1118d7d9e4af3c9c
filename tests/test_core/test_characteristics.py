"""Tests for characteristic flags and the merge rules for zipping."""

import pytest

from pairflow.core.characteristics import (
    NO_CHARACTERISTICS,
    UNKNOWN_SIZE,
    Characteristic,
    check_size,
    describe,
    merge_characteristics,
    merge_sizes,
    with_size,
)

C = Characteristic


def merged(c1, c2, size1=10, size2=10):
    return merge_characteristics(c1, c2, size1, size2)


class TestMergeSizes:
    """Test cases for merge_sizes."""

    @pytest.mark.parametrize(
        "size1, size2, expected",
        [
            (3, 5, 3),
            (5, 3, 3),
            (0, 7, 0),
            (4, UNKNOWN_SIZE, 4),
            (UNKNOWN_SIZE, 4, 4),
            (UNKNOWN_SIZE, UNKNOWN_SIZE, UNKNOWN_SIZE),
        ],
    )
    def test_minimum_with_saturation(self, size1, size2, expected):
        """Test that the unknown size loses to any finite size."""
        assert merge_sizes(size1, size2) == expected

    def test_invalid_sizes(self):
        """Test that negative or non-integer sizes are rejected."""
        with pytest.raises(ValueError):
            merge_sizes(-1, 3)
        with pytest.raises(TypeError):
            merge_sizes(2.5, 3)
        with pytest.raises(TypeError):
            check_size(True)


class TestMergeCharacteristics:
    """Test cases for merge_characteristics."""

    def test_ordered_requires_both(self):
        """Test that ORDERED is kept only when both sides are ordered."""
        assert C.ORDERED in merged(C.ORDERED, C.ORDERED)
        assert C.ORDERED not in merged(C.ORDERED, NO_CHARACTERISTICS)
        assert C.ORDERED not in merged(NO_CHARACTERISTICS, C.ORDERED)

    def test_immutable_requires_both(self):
        """Test that IMMUTABLE is kept only when both sides are immutable."""
        assert C.IMMUTABLE in merged(C.IMMUTABLE, C.IMMUTABLE)
        assert C.IMMUTABLE not in merged(C.IMMUTABLE, C.ORDERED)

    def test_distinct_is_or(self):
        """Test that one distinct side is enough for distinct pairs."""
        assert C.DISTINCT in merged(C.DISTINCT, NO_CHARACTERISTICS)
        assert C.DISTINCT in merged(NO_CHARACTERISTICS, C.DISTINCT)
        assert C.DISTINCT in merged(C.DISTINCT, C.DISTINCT)
        assert C.DISTINCT not in merged(C.ORDERED, C.ORDERED)

    def test_sorted_never(self):
        """Test that SORTED is dropped even when both sides are sorted."""
        both_sorted = C.SORTED | C.ORDERED
        assert C.SORTED not in merged(both_sorted, both_sorted)

    def test_nonnull_always(self):
        """Test that NONNULL is set even when neither side is non-null."""
        assert C.NONNULL in merged(NO_CHARACTERISTICS, NO_CHARACTERISTICS)
        assert C.NONNULL in merged(C.NONNULL, NO_CHARACTERISTICS)

    @pytest.mark.parametrize(
        "c1, c2, expected",
        [
            (C.CONCURRENT, C.CONCURRENT, True),
            (C.CONCURRENT, C.IMMUTABLE, True),
            (C.IMMUTABLE, C.CONCURRENT, True),
            (C.CONCURRENT, NO_CHARACTERISTICS, False),
            (C.CONCURRENT, C.ORDERED, False),
            (C.ORDERED, C.CONCURRENT, False),
            (C.IMMUTABLE, C.IMMUTABLE, False),
        ],
    )
    def test_concurrent(self, c1, c2, expected):
        """Test CONCURRENT: both sides, or one side plus an immutable other side."""
        assert (C.CONCURRENT in merged(c1, c2)) is expected

    def test_sized_follows_merged_size(self):
        """Test that SIZED and SUBSIZED are present exactly when the merged size is finite."""
        sized = C.SIZED | C.SUBSIZED

        assert sized in merged(sized, sized, 3, 4)
        # one side misreports its flags: the finite size wins
        assert sized in merged(NO_CHARACTERISTICS, NO_CHARACTERISTICS, 3, 4)
        assert sized in merged(sized, NO_CHARACTERISTICS, 3, UNKNOWN_SIZE)

        result = merged(sized, sized, UNKNOWN_SIZE, UNKNOWN_SIZE)
        assert C.SIZED not in result
        assert C.SUBSIZED not in result

    def test_full_example(self):
        """Test merging two ordered immutable sized sources, one of them distinct and sorted."""
        left = C.ORDERED | C.IMMUTABLE | C.SIZED | C.SUBSIZED
        right = left | C.DISTINCT | C.SORTED | C.NONNULL

        assert merged(left, right, 5, 3) == (
            C.ORDERED | C.IMMUTABLE | C.DISTINCT | C.NONNULL | C.SIZED | C.SUBSIZED
        )


class TestHelpers:
    """Test cases for with_size and describe."""

    def test_with_size(self):
        """Test that with_size forces SIZED|SUBSIZED on and off."""
        assert with_size(C.ORDERED, 0) == C.ORDERED | C.SIZED | C.SUBSIZED
        assert with_size(C.ORDERED | C.SIZED, UNKNOWN_SIZE) == C.ORDERED

    def test_describe(self):
        """Test the textual rendering of a flag set."""
        assert describe(C.ORDERED | C.SIZED) == "ORDERED|SIZED"
        assert describe(NO_CHARACTERISTICS) == "NONE"
