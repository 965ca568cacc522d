"""Trailing-edge rate limiting for frame-loop driven UIs.

A ``RateLimiter`` wraps a target callable. Each call records the latest
arguments and pushes the deadline ``delay`` seconds past now; ``poll()``
(once per frame) invokes the target when the deadline has passed. A burst of
calls therefore collapses into one invocation with the last arguments.
Nothing runs on another thread.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class _PendingCall:
    """Arguments of the latest call and when they become due."""

    deadline: float
    args: tuple
    kwargs: dict[str, Any]


class RateLimiter:
    """Trailing-edge delayed invoker with explicit cancellation."""

    def __init__(
        self,
        delay: float,
        target: Callable[..., Any],
        *,
        name: str | None = None,
        _clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.delay = delay
        self.name = name or getattr(target, "__name__", repr(target))
        self._target = target
        self._clock = _clock
        self._pending: _PendingCall | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        """Schedule the target, replacing any pending call.

        ``delay <= 0`` invokes the target immediately.
        """
        if self.delay <= 0:
            self._pending = None
            self._invoke(args, kwargs)
            return
        self._pending = _PendingCall(
            deadline=self._clock() + self.delay,
            args=args,
            kwargs=kwargs,
        )

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def poll(self) -> bool:
        """Invoke the pending call if its deadline has passed.

        Returns whether the target ran.
        """
        if self._pending is None or self._clock() < self._pending.deadline:
            return False
        return self.flush()

    def flush(self) -> bool:
        """Invoke the pending call now, regardless of its deadline."""
        call = self._pending
        if call is None:
            return False
        # Cleared first so the target may schedule again
        self._pending = None
        self._invoke(call.args, call.kwargs)
        return True

    def cancel(self) -> None:
        """Drop the pending call, if any. Safe to call repeatedly."""
        if self._pending is not None:
            logger.debug("Cancelled pending %s", self.name)
        self._pending = None

    def _invoke(self, args: tuple, kwargs: dict[str, Any]) -> None:
        try:
            self._target(*args, **kwargs)
        except Exception:
            logger.warning("Rate-limited call %s raised", self.name, exc_info=True)
