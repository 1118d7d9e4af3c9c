"""
Shared fixtures for stream and zip testing.
"""

import pytest

import pairflow
from pairflow.core.cursors import CursorBase


class RecordingCursor(CursorBase):
    """Cursor over a list that records every call made to it."""

    def __init__(self, name, items, log):
        self.name = name
        self._items = list(items)
        self._position = 0
        self.log = log

    def has_more(self):
        self.log.append((self.name, "has_more"))
        return self._position < len(self._items)

    def advance(self):
        self.log.append((self.name, "advance"))
        if self._position >= len(self._items):
            raise pairflow.errors.ExhaustedError("exhausted")
        element = self._items[self._position]
        self._position += 1
        return element


@pytest.fixture
def numbers():
    """Five ordered integers."""
    return [1, 2, 3, 4, 5]


@pytest.fixture
def letters():
    """Five ordered letters."""
    return ["a", "b", "c", "d", "e"]


@pytest.fixture
def naturals():
    """Infinite stream 1, 2, 3, ..."""
    return pairflow.iterate(1, lambda x: x + 1)


@pytest.fixture
def negatives():
    """Infinite stream -1, -2, -3, ..."""
    return pairflow.iterate(-1, lambda x: x - 1)


@pytest.fixture
def call_log():
    """Shared log for RecordingCursor instances."""
    return []


@pytest.fixture
def recording_cursor(call_log):
    """Factory creating RecordingCursors that share one call log."""

    def make(name, items):
        return RecordingCursor(name, items, call_log)

    return make
