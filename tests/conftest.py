# tests/conftest.py
"""Shared fixtures. The repo is a flat layout, so put its root on sys.path."""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from common.utils import utc_instant  # noqa: E402
from calc.event_windows import EventWindow  # noqa: E402


@pytest.fixture
def weekend_window():
    return EventWindow.from_utc("wild_area_weekend", (2024, 11, 23, 0, 0, 0), (2024, 11, 24, 23, 59, 59))


@pytest.fixture
def fixed_now():
    """2024-11-27T00:00:00Z, exactly four days after the weekend window starts."""
    return utc_instant(2024, 11, 27)


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.done = False

    def cancel(self):
        self.cancelled = True

    def run(self):
        """Fire the timer the way the loop would: it is spent before the callback runs."""
        self.done = True
        self.callback()


class FakeLoop:
    """Stands in for an asyncio loop: records call_later and never runs anything."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        h = FakeHandle(delay, callback)
        self.handles.append(h)
        return h

    @property
    def pending(self):
        return [h for h in self.handles if not (h.cancelled or h.done)]


@pytest.fixture
def fake_loop():
    return FakeLoop()
