"""Test configuration for chromasync."""

import pytest


class FakeClock:
    """Deterministic clock for rate-limit tests."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()
