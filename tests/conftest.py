"""Shared pytest fixtures."""

import pytest

import tagmemo.engine
from tagmemo import TagVersionRegistry


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, now: int = 1_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def registry() -> TagVersionRegistry:
    """Create a fresh TagVersionRegistry for each test."""
    return TagVersionRegistry()


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Pin the clock memoized methods read timestamps from."""
    fake = FakeClock()
    monkeypatch.setattr(tagmemo.engine, "_now_ms", fake)
    return fake
