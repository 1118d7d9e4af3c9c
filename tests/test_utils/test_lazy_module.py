"""Tests for LazyModule."""

import pytest

from pairflow.utils.lazy_module import LazyModule


class TestLazyModule:
    """Test cases for LazyModule."""

    def test_loads_on_attribute_access(self):
        """Test that the module is imported on first attribute access."""
        module = LazyModule("json")

        assert not module.is_loaded
        assert module.dumps([1]) == "[1]"
        assert module.is_loaded

    def test_private_attributes(self):
        """Test that private attributes are not looked up on the module."""
        module = LazyModule("json")

        with pytest.raises(AttributeError):
            module._private
        assert not module.is_loaded

    def test_repr(self):
        """Test that repr reports whether the module is loaded."""
        module = LazyModule("json")

        assert "not loaded" in repr(module)
        module.load()
        assert "(loaded)" in repr(module)
