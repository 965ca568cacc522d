"""Toolkit-neutral theme state for the editor."""

from __future__ import annotations

from dataclasses import dataclass, field

from chromasync import defaults


def default_theme_colors() -> dict[str, str]:
    """Fresh copy of the default palette."""
    return dict(defaults.DEFAULT_THEME_COLORS)


@dataclass
class ThemeState:
    """Ground-truth theme being edited.

    ``colors`` maps shadcn/ui token names (``background``, ``primary``, ...)
    to CSS color strings exactly as last committed. Mutate only through
    ``ThemeStateManager``.
    """

    name: str = defaults.DEFAULT_THEME_NAME
    colors: dict[str, str] = field(default_factory=default_theme_colors)
