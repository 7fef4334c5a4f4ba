"""Shared test fixtures for typedrill tests."""

import tempfile
from pathlib import Path

import pytest

from core.typing_engine import TypingEngine


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Create a fake monotonic clock."""
    return FakeClock()


@pytest.fixture
def make_engine(clock):
    """Factory for engines driven by the fake clock."""

    def _make(text: str = "ab cd") -> TypingEngine:
        return TypingEngine(text, clock=clock)

    return _make


@pytest.fixture
def temp_config_path():
    """Create a temporary settings path and clean up afterwards."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "typedrill" / "settings.json"
