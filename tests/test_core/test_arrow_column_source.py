"""Tests for streams over arrow columns and polars series."""

import polars as pl
import pyarrow as pa
import pytest

import pairflow
from pairflow import Characteristic, Pair
from pairflow.core.sources import ArrowColumnSource

C = Characteristic


class TestArrowColumnSource:
    """Test cases for ArrowColumnSource."""

    def test_array(self):
        """Test a source over a pyarrow Array without nulls."""
        source = ArrowColumnSource(pa.array([1, 2, 3]))

        assert source.characteristics == (
            C.ORDERED | C.IMMUTABLE | C.NONNULL | C.SIZED | C.SUBSIZED
        )
        assert source.estimate_size() == 3
        assert list(source) == [1, 2, 3]

    def test_nulls(self):
        """Test that a column with nulls is not NONNULL."""
        source = ArrowColumnSource(pa.array([1, None, 3]))

        assert not source.has_characteristics(C.NONNULL)
        assert list(source) == [1, None, 3]

    def test_chunked_array(self):
        """Test that all chunks are traversed in order."""
        column = pa.chunked_array([[1, 2], [3], []])
        source = ArrowColumnSource(column)

        assert source.column is column
        assert source.estimate_size() == 3
        assert list(source) == [1, 2, 3]

    def test_polars_series(self):
        """Test a source over a polars Series."""
        source = ArrowColumnSource(pl.Series("names", ["x", "y"]))

        assert source.estimate_size() == 2
        assert list(source) == ["x", "y"]

    def test_rejects_other_types(self):
        """Test that plain lists are rejected."""
        with pytest.raises(TypeError):
            ArrowColumnSource([1, 2, 3])


class TestArrowStreams:
    """Test cases for from_arrow and from_polars streams."""

    def test_zip_columns(self):
        """Test zipping an arrow column with a polars series."""
        stream = pairflow.zip(
            pairflow.from_arrow(pa.array([1, 2, 3])),
            pairflow.from_polars(pl.Series(["a", "b"])),
        )

        assert stream.has_characteristics(C.ORDERED | C.IMMUTABLE | C.SIZED)
        assert stream.to_list() == [Pair.of(1, "a"), Pair.of(2, "b")]

    def test_table_round_trip(self):
        """Test materializing a zip of arrow columns back into a table."""
        table = pairflow.zip(
            pairflow.from_arrow(pa.array([1.5, 2.5])),
            pairflow.from_arrow(pa.array(["u", "v"])),
        ).as_table()

        assert table.column("m1").to_pylist() == [1.5, 2.5]
        assert table.column("m2").to_pylist() == ["u", "v"]
