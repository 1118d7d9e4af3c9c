"""Tests for the Pair value type."""

import dataclasses

import pytest

from pairflow import Pair


class TestPair:
    """Test cases for Pair."""

    def test_members(self):
        """Test that of() stores both members in order."""
        pair = Pair.of(1, "a")

        assert pair.m1 == 1
        assert pair.m2 == "a"
        assert pair.to_tuple() == (1, "a")

    def test_unpacking(self):
        """Test that a pair unpacks into m1, m2."""
        m1, m2 = Pair.of("x", 2.5)

        assert (m1, m2) == ("x", 2.5)

    def test_structural_equality_and_hash(self):
        """Test that equality and hashing are over both members."""
        assert Pair.of(1, "a") == Pair.of(1, "a")
        assert Pair.of(1, "a") != Pair.of("a", 1)
        assert Pair.of(1, None) != Pair.of(1, "a")
        assert hash(Pair.of(1, "a")) == hash(Pair.of(1, "a"))
        assert len({Pair.of(1, "a"), Pair.of(1, "a"), Pair.of(2, "a")}) == 2

    def test_none_members(self):
        """Test that members may be None."""
        pair = Pair.of(None, None)

        assert pair.m1 is None
        assert pair.m2 is None
        assert pair == Pair.of(None, None)

    def test_str(self):
        """Test the '(m1, m2)' textual form."""
        assert str(Pair.of(1, "a")) == "(1, a)"
        assert str(Pair.of(None, "b")) == "(null, b)"
        assert str(Pair.of(3, None)) == "(3, null)"

    def test_immutable(self):
        """Test that members cannot be reassigned."""
        pair = Pair.of(1, 2)

        with pytest.raises(dataclasses.FrozenInstanceError):
            pair.m1 = 5  # type: ignore[misc]
