"""Tests for chromasync.app.rate_limiter."""

import logging

import pytest

from chromasync.app.rate_limiter import RateLimiter


@pytest.fixture
def calls():
    return []


@pytest.fixture
def limiter(calls, fake_clock):
    return RateLimiter(0.25, calls.append, name="test", _clock=fake_clock)


class TestTrailingEdge:

    def test_not_called_before_delay(self, limiter, calls, fake_clock):
        limiter("a")
        fake_clock.advance(0.2)
        assert limiter.poll() is False
        assert calls == []
        assert limiter.pending

    def test_called_once_after_delay(self, limiter, calls, fake_clock):
        limiter("a")
        fake_clock.advance(0.25)
        assert limiter.poll() is True
        assert calls == ["a"]
        assert not limiter.pending
        assert limiter.poll() is False
        assert calls == ["a"]

    def test_burst_collapses_to_last_arguments(self, limiter, calls, fake_clock):
        for value in ("a", "b", "c"):
            limiter(value)
            fake_clock.advance(0.1)
            limiter.poll()
        assert calls == []

        fake_clock.advance(0.25)
        limiter.poll()
        assert calls == ["c"]

    def test_each_call_pushes_the_deadline(self, limiter, calls, fake_clock):
        limiter("a")
        fake_clock.advance(0.2)
        limiter("b")
        fake_clock.advance(0.1)
        assert limiter.poll() is False
        fake_clock.advance(0.15)
        assert limiter.poll() is True
        assert calls == ["b"]

    def test_kwargs_are_forwarded(self, fake_clock):
        received = {}
        limiter = RateLimiter(0.1, lambda **kw: received.update(kw), _clock=fake_clock)
        limiter(value=3)
        limiter.flush()
        assert received == {"value": 3}

    def test_zero_delay_is_immediate(self, calls, fake_clock):
        limiter = RateLimiter(0, calls.append, _clock=fake_clock)
        limiter("now")
        assert calls == ["now"]
        assert not limiter.pending


class TestCancelAndFlush:

    def test_cancel_drops_pending_call(self, limiter, calls, fake_clock):
        limiter("a")
        limiter.cancel()
        fake_clock.advance(1.0)
        assert limiter.poll() is False
        assert calls == []

    def test_cancel_is_idempotent(self, limiter):
        limiter.cancel()
        limiter.cancel()
        assert not limiter.pending

    def test_flush_ignores_deadline(self, limiter, calls):
        limiter("a")
        assert limiter.flush() is True
        assert calls == ["a"]
        assert limiter.flush() is False

    def test_target_may_reschedule(self, fake_clock):
        calls = []

        def target(n):
            calls.append(n)
            if n < 2:
                limiter(n + 1)

        limiter = RateLimiter(0.1, target, _clock=fake_clock)
        limiter(0)
        for _ in range(3):
            fake_clock.advance(0.15)
            limiter.poll()
        assert calls == [0, 1, 2]
        assert not limiter.pending


class TestErrors:

    def test_target_exception_is_logged(self, fake_clock, caplog):
        def boom(_value):
            raise RuntimeError("boom")

        limiter = RateLimiter(0.1, boom, name="boom", _clock=fake_clock)
        limiter("x")
        fake_clock.advance(0.1)
        with caplog.at_level(logging.WARNING):
            assert limiter.poll() is True
        assert "boom" in caplog.text
        assert not limiter.pending

    def test_default_name_from_target(self):
        def commit(value):
            pass

        assert RateLimiter(0.1, commit).name == "commit"
