"""Pytest configuration for tests."""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Run Qt headless unless a platform is chosen explicitly
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the parent directory to the path so we can import zonepulse
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

from zonepulse.config import Settings


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingView:
    """Stand-in for a zone's list view that records scroll requests."""

    def __init__(self):
        self.calls = []

    def scroll_to_index(self, index: int, alignment: str):
        self.calls.append((index, alignment))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_view_factory():
    return RecordingView


@pytest.fixture
def settings() -> Settings:
    return Settings(reference_zone="Europe/London").validate()


@pytest.fixture
def march_10_morning() -> datetime:
    """08:15 on Sunday 2024-03-10 in London (GMT, no DST that day)."""
    return datetime(2024, 3, 10, 8, 15, tzinfo=timezone.utc)
