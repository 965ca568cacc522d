"""Editing session for one color control.

A ``ColorSyncController`` reconciles three sources of change for a single
color: the external value owned by the theme state, the user's edits
(text field, native color well, OKLCH sliders), and the rate-limited
``on_change`` commit back to the owner. Comparisons between the external
value and the displayed value are done on canonical OKLCH text, so a
commit echoed back in a different spelling never triggers another commit.

Slider drags go through two limiters: the fast slider limiter coalesces
drag events, then hands the formatted value to the commit limiter, which
coalesces again before calling ``on_change``.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from chromasync import defaults
from chromasync.app.rate_limiter import RateLimiter
from chromasync.colorspace import (
    CHANNELS,
    CanonicalColor,
    ColorFormat,
    InvalidColor,
    format_color,
    normalize,
    parse,
    to_hex,
)

logger = logging.getLogger(__name__)

SessionValue = Union[CanonicalColor, str]


class SyncState(enum.Enum):
    """Where a session stands relative to the external value."""

    IDLE = "idle"  # showing a color consistent with the external value
    RAW_INVALID = "raw_invalid"  # showing text that does not parse; nothing committed
    DIRTY = "dirty"  # edited value not yet committed


@dataclass
class EditingSession:
    """Transient state of one color control."""

    value: SessionValue
    last_external: str
    last_committed: Optional[str] = None

    @property
    def is_raw(self) -> bool:
        return isinstance(self.value, str)


def _parse_or_raw(text: str) -> SessionValue:
    try:
        return parse(text)
    except InvalidColor:
        return text


def _display(value: SessionValue) -> str:
    if isinstance(value, str):
        return value
    return format_color(value, ColorFormat.OKLCH)


class ColorSyncController:
    """Keeps one color's text, color well and sliders consistent with its owner.

    All methods are meant to be called from the UI thread. Deferred commits
    fire from ``poll()``, which the frame loop calls once per frame.
    """

    def __init__(
        self,
        color: str,
        on_change: Callable[[str], None],
        *,
        commit_delay: float = defaults.DEFAULT_COMMIT_DELAY,
        slider_delay: float = defaults.DEFAULT_SLIDER_DELAY,
        _clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._on_change = on_change
        self._commit = RateLimiter(commit_delay, self._emit, name="commit", _clock=_clock)
        self._slider = RateLimiter(slider_delay, self._commit, name="slider", _clock=_clock)
        self._closed = False
        self.session = EditingSession(value=_parse_or_raw(color), last_external=color)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> SyncState:
        if self.session.is_raw:
            return SyncState.RAW_INVALID
        if self._slider.pending or self._commit.pending:
            return SyncState.DIRTY
        return SyncState.IDLE

    @property
    def dirty(self) -> bool:
        return self._slider.pending or self._commit.pending

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def color(self) -> Optional[CanonicalColor]:
        """The canonical value, or None while showing unparsable text."""
        value = self.session.value
        return None if isinstance(value, str) else value

    @property
    def display_text(self) -> str:
        """Text for the input field: formatted OKLCH, or the raw string as typed."""
        return _display(self.session.value)

    @property
    def display_hex(self) -> str:
        """Value for the native color well."""
        return to_hex(self.session.value)

    @property
    def controls_color(self) -> CanonicalColor:
        """Color the sliders show; a fixed default while the text is unparsable."""
        value = self.session.value
        if isinstance(value, str):
            L, C, H, A = defaults.DEFAULT_CONTROLS_COLOR
            return CanonicalColor(L, C, H, A)
        return value

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def sync_external(self, color: str) -> bool:
        """Reconcile with the owner's current value (a props update).

        Returns whether the displayed value changed.
        """
        session = self.session
        if color == session.last_external:
            return False
        session.last_external = color

        if self.dirty and color == session.last_committed:
            # Echo of an earlier commit; a newer edit is still on its way out
            return False

        try:
            incoming: SessionValue = parse(color)
        except InvalidColor:
            incoming = color

        if _display(incoming) == _display(session.value):
            return False

        logger.debug("Adopting external color %r", color)
        self._cancel_pending()
        session.value = incoming
        session.last_committed = None
        return True

    def edit_text(self, text: str) -> None:
        """User typed in the text field."""
        try:
            color = parse(text)
        except InvalidColor:
            # Keep what the user typed; never commit an intermediate state
            self.session.value = text
            self._cancel_pending()
            return

        self.session.value = color
        self._slider.cancel()
        self._schedule(self._commit, format_color(color, ColorFormat.OKLCH))

    def pick_native(self, hex_value: str) -> None:
        """User picked a color in the native color well."""
        self.edit_text(hex_value)

    def adjust_channel(self, channel: str, value: float) -> CanonicalColor:
        """User dragged one of the lightness / chroma / hue / alpha sliders.

        Returns the normalized color now displayed.
        """
        if channel not in CHANNELS:
            raise ValueError(f"Unknown channel {channel!r}, expected one of {CHANNELS}")

        color = normalize(dataclasses.replace(self.controls_color, **{channel: value}))
        self.session.value = color
        self._schedule(self._slider, format_color(color, ColorFormat.OKLCH))
        return color

    def poll(self) -> bool:
        """Fire due deferred work. Returns whether ``on_change`` was called."""
        if self._closed:
            return False
        self._slider.poll()
        return self._commit.poll()

    def flush(self) -> bool:
        """Commit any pending edit immediately."""
        if self._closed:
            return False
        self._slider.flush()
        return self._commit.flush()

    def close(self) -> None:
        """Tear down the session; nothing fires afterwards."""
        self._cancel_pending()
        self._closed = True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _schedule(self, limiter: RateLimiter, formatted: str) -> None:
        if self._closed:
            logger.debug("Ignoring edit on closed color session")
            return
        limiter(formatted)

    def _cancel_pending(self) -> None:
        self._slider.cancel()
        self._commit.cancel()

    def _emit(self, formatted: str) -> None:
        self.session.last_committed = formatted
        self._on_change(formatted)
