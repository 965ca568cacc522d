"""Single write path for theme state.

ThemeStateManager mediates all theme mutations, providing:
- One commit path that color controls call through their ``on_change``
- Per-key subscriber notifications (outside the lock)
- A refresh flag the frame loop consumes to re-style the preview
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import Callable, Mapping

from chromasync.app.core import ThemeState

logger = logging.getLogger(__name__)

# Callback signature: (key, value)
Subscriber = Callable[[str, str], None]


class ThemeStateManager:
    """Mutation and notification hub for a ``ThemeState``.

    Color changes land here via ``set_color`` and are applied under the
    lock, so a commit is atomic with respect to readers taking
    ``snapshot()``. The manager never re-styles anything itself; it sets
    ``_needs_refresh`` and the main loop checks it once per frame.
    """

    def __init__(self, state: ThemeState, lock: threading.RLock | None = None) -> None:
        self._state = state
        self._lock = lock if lock is not None else threading.RLock()
        self._subscribers: dict[str, list[Subscriber]] = {}
        self._needs_refresh: bool = True

    @property
    def state(self) -> ThemeState:
        return self._state

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_color(self, key: str, value: str) -> None:
        """Store ``value`` for theme token ``key``.

        Raises:
            KeyError: If ``key`` is not a token of the current theme.
        """
        with self._lock:
            if key not in self._state.colors:
                raise KeyError(f"Unknown theme color {key!r}")
            if self._state.colors[key] == value:
                return
            self._state.colors[key] = value

        logger.debug("Theme color %s = %s", key, value)
        self._notify(key, value)
        self._needs_refresh = True

    def get_color(self, key: str) -> str:
        with self._lock:
            return self._state.colors[key]

    def snapshot(self) -> dict[str, str]:
        """Copy of the current token -> color mapping."""
        with self._lock:
            return dict(self._state.colors)

    def load_colors(self, name: str, colors: Mapping[str, str]) -> None:
        """Replace the palette, e.g. when a preset is selected.

        Unknown tokens are ignored; tokens missing from ``colors`` keep
        their current value.
        """
        changed: list[tuple[str, str]] = []
        with self._lock:
            self._state.name = name
            for key, value in colors.items():
                if key not in self._state.colors:
                    logger.warning("Preset %r has unknown color %r; ignored", name, key)
                    continue
                if self._state.colors[key] != value:
                    self._state.colors[key] = value
                    changed.append((key, value))

        for key, value in changed:
            self._notify(key, value)
        self._needs_refresh = True

    def commit_callback(self, key: str) -> Callable[[str], None]:
        """``on_change`` for the color control editing ``key``."""
        if key not in self._state.colors:
            raise KeyError(f"Unknown theme color {key!r}")
        return functools.partial(self.set_color, key)

    def subscribe(self, key: str, callback: Subscriber) -> None:
        """Register *callback* for notifications when *key* changes."""
        self._subscribers.setdefault(key, []).append(callback)

    def unsubscribe(self, key: str, callback: Subscriber) -> None:
        """Remove a previously registered callback."""
        callbacks = self._subscribers.get(key)
        if callbacks:
            try:
                callbacks.remove(callback)
            except ValueError:
                pass

    def needs_refresh(self) -> bool:
        """Return whether any color changed since the last consume."""
        return self._needs_refresh

    def consume_refresh(self) -> bool:
        """Reset the refresh flag and return its previous value."""
        needed = self._needs_refresh
        self._needs_refresh = False
        return needed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _notify(self, key: str, value: str) -> None:
        """Call all subscribers registered for *key*, isolating exceptions."""
        callbacks = self._subscribers.get(key)
        if not callbacks:
            return
        for cb in list(callbacks):
            try:
                cb(key, value)
            except Exception:
                logger.warning(
                    "Subscriber %r raised for %s", cb, key, exc_info=True,
                )
