"""Tests for CollectionSource and its fail-fast cursor."""

from collections import deque

import pytest

from pairflow import Characteristic, Config
from pairflow.core.sources import CollectionCursor, CollectionSource, infer_characteristics
from pairflow.errors import ConcurrentModificationError, ExhaustedError

C = Characteristic


class TestInferCharacteristics:
    """Test cases for characteristics inferred from builtin collections."""

    @pytest.mark.parametrize(
        "collection, expected",
        [
            ([1, 2], C.ORDERED),
            (deque([1, 2]), C.ORDERED),
            ((1, 2), C.ORDERED | C.IMMUTABLE),
            ("ab", C.ORDERED | C.IMMUTABLE),
            (range(3), C.ORDERED | C.IMMUTABLE),
            ({1, 2}, C.DISTINCT),
            (frozenset({1, 2}), C.DISTINCT | C.IMMUTABLE),
            ({"a": 1}, C.ORDERED | C.DISTINCT),
            ({"a": 1}.keys(), C.ORDERED | C.DISTINCT),
            ({"a": 1}.items(), C.ORDERED | C.DISTINCT),
            ({"a": 1}.values(), C.ORDERED),
        ],
    )
    def test_builtin_collections(self, collection, expected):
        """Test the inferred flags for each builtin collection type."""
        assert infer_characteristics(collection) == expected


class TestCollectionSource:
    """Test cases for CollectionSource."""

    def test_always_sized(self):
        """Test that collection sources are always SIZED."""
        source = CollectionSource({1, 2, 3})

        assert source.has_characteristics(C.DISTINCT | C.SIZED | C.SUBSIZED)
        assert source.exact_size() == 3

    def test_rejects_non_collections(self):
        """Test that iterables without a length are rejected."""
        with pytest.raises(TypeError):
            CollectionSource(x for x in range(3))

    def test_size_tracks_collection_until_bound(self):
        """Test that the size estimate follows the live collection until the first pull."""
        items = [1, 2]
        source = CollectionSource(items)
        items.append(3)

        assert source.estimate_size() == 3
        cursor = source.as_cursor()
        assert cursor.advance() == 1
        assert source.estimate_size() == 2

    def test_values_read_from_live_collection(self):
        """Test that the collection is not copied."""
        items = [1, 2]
        source = CollectionSource(items)
        items[0] = 10

        assert list(source) == [10, 2]


class TestCollectionCursor:
    """Test cases for CollectionCursor."""

    def test_binds_at_first_pull(self):
        """Test that the cursor is unbound until the first pull."""
        cursor = CollectionCursor([1, 2])

        assert not cursor.is_bound
        assert cursor.has_more()
        assert cursor.is_bound

    def test_exhausted(self):
        """Test advancing past the end."""
        cursor = CollectionCursor([1])

        assert cursor.advance() == 1
        assert not cursor.has_more()
        with pytest.raises(ExhaustedError):
            cursor.advance()

    def test_growth_fails_fast(self):
        """Test that adding elements after the first pull is detected."""
        items = [1, 2, 3]
        cursor = CollectionCursor(items)
        cursor.advance()
        items.append(4)

        with pytest.raises(ConcurrentModificationError):
            cursor.has_more()
        with pytest.raises(ConcurrentModificationError):
            cursor.advance()

    def test_set_modification_fails_fast(self):
        """Test fail-fast detection on a set."""
        items = {1, 2, 3}
        cursor = CollectionCursor(items)
        cursor.advance()
        items.discard(next(iter(items)))

        with pytest.raises(ConcurrentModificationError):
            cursor.advance()

    def test_fail_fast_disabled(self):
        """Test that with fail_fast off a list keeps its bound length."""
        items = [1, 2, 3]
        cursor = CollectionCursor(items, fail_fast=False)
        assert cursor.advance() == 1
        items.append(4)

        assert list(cursor) == [2, 3]

    def test_dict_iterator_error_translated(self):
        """Test that the dict iterator's own mutation error becomes ConcurrentModificationError."""
        mapping = {"a": 1, "b": 2}
        cursor = CollectionCursor(mapping, fail_fast=False)
        cursor.advance()
        mapping["c"] = 3

        with pytest.raises(ConcurrentModificationError):
            cursor.advance()

    def test_config_controls_fail_fast(self):
        """Test that the source reads fail_fast from its config."""
        items = [1, 2]
        source = CollectionSource(items, pairflow_config=Config(fail_fast=False))
        cursor = source.as_cursor()
        cursor.advance()
        items.append(3)

        assert cursor.has_more()
        assert cursor.advance() == 2
        assert not cursor.has_more()
