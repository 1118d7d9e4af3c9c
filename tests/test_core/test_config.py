"""Tests for Config."""

import dataclasses

import pytest

import pairflow
from pairflow import DEFAULT_CONFIG, Config


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self):
        """Test the default configuration values."""
        assert DEFAULT_CONFIG.fail_fast is True
        assert DEFAULT_CONFIG.pair_column_names == ("m1", "m2")
        assert DEFAULT_CONFIG.value_column_name == "value"
        assert DEFAULT_CONFIG.parallel_max_workers is None

    def test_frozen(self):
        """Test that configs are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.fail_fast = False  # type: ignore[misc]

    def test_with_updates(self):
        """Test that with_updates returns a modified copy."""
        config = DEFAULT_CONFIG.with_updates(value_column_name="x")

        assert config.value_column_name == "x"
        assert DEFAULT_CONFIG.value_column_name == "value"

    def test_merge(self):
        """Test that only non-default values of the other config take precedence."""
        base = Config(fail_fast=False, value_column_name="v")
        other = Config(parallel_max_workers=2)
        merged = base.merge(other)

        assert merged.fail_fast is False
        assert merged.value_column_name == "v"
        assert merged.parallel_max_workers == 2

    def test_merge_type_check(self):
        """Test that merging with a non-Config fails."""
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.merge({"fail_fast": False})  # type: ignore[arg-type]

    def test_column_names(self):
        """Test that configured column names are used for materialization."""
        config = Config(pair_column_names=("left", "right"), value_column_name="item")

        pairs = pairflow.of(1, 2, pairflow_config=config).zip(pairflow.of("a", "b"))
        assert pairs.pairflow_config is config
        assert pairs.as_table().column_names == ["left", "right"]

        values = pairflow.of(1, 2, pairflow_config=config)
        assert values.as_table().column_names == ["item"]

    def test_fail_fast_off(self):
        """Test streaming a list with fail-fast detection disabled."""
        items = [1, 2, 3]
        pairs = iter(
            pairflow.zip(
                pairflow.from_collection(items, pairflow_config=Config(fail_fast=False)),
                ["a", "b", "c"],
            )
        )
        next(pairs)
        items.append(4)

        assert len(list(pairs)) == 2
