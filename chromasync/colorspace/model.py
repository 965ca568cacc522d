"""Canonical color value and the parse / normalize / format entry points.

``CanonicalColor`` (OKLCH + alpha) is the single source of truth while a
color is being edited. Text in any supported syntax is parsed into it and
formatted out of it; two strings denote the same color when their
canonical forms format identically, never by comparing the strings.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Union

import numpy as np

from chromasync import defaults
from .css import ParsedColor, parse_css_color
from .errors import FormatUnsupported, InvalidColor
from .formats import ColorFormat, clipped_srgb, get_policy
from .hsl import hsl_to_srgb
from .oklch import srgb_to_oklch

logger = logging.getLogger(__name__)

CHANNELS: tuple[str, ...] = ("lightness", "chroma", "hue", "alpha")


@dataclass(frozen=True)
class CanonicalColor:
    """OKLCH color with alpha.

    Fields hold full float precision; only formatted strings are rounded.
    Construct through ``normalize`` or ``parse`` to get the domain
    guarantees (L, alpha in [0,1], C >= 0, H in [0,360), no NaN).
    """

    lightness: float = defaults.DEFAULT_LIGHTNESS
    chroma: float = defaults.DEFAULT_CHROMA
    hue: float = defaults.DEFAULT_HUE
    alpha: float = defaults.DEFAULT_ALPHA

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.lightness, self.chroma, self.hue, self.alpha)


PartialColor = Union[CanonicalColor, Mapping[str, Any]]

_CHANNEL_DEFAULTS = {
    "lightness": defaults.DEFAULT_LIGHTNESS,
    "chroma": defaults.DEFAULT_CHROMA,
    "hue": defaults.DEFAULT_HUE,
    "alpha": defaults.DEFAULT_ALPHA,
}


def _coerce(value: Any, default: float) -> float:
    """Float value of a channel, or ``default`` if missing, non-numeric or non-finite."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def wrap_hue(hue: float) -> float:
    """Fold degrees into [0, 360), negative input included."""
    # Python's % already takes the sign of the divisor; exact for hue >= 0
    wrapped = hue % 360
    # -1e-20 % 360 == 360.0 in float arithmetic
    return 0.0 if wrapped >= 360 else wrapped


def normalize(partial: PartialColor) -> CanonicalColor:
    """Clamp every channel into its domain and fill missing channels with defaults.

    Accepts a ``CanonicalColor`` or a mapping with any subset of
    ``lightness``, ``chroma``, ``hue``, ``alpha``. Idempotent.
    """
    if isinstance(partial, CanonicalColor):
        raw = dict(zip(CHANNELS, partial.as_tuple()))
    elif isinstance(partial, Mapping):
        raw = {name: partial.get(name) for name in CHANNELS}
    else:
        raise TypeError(f"Cannot normalize {type(partial).__name__}")

    values = {name: _coerce(raw[name], _CHANNEL_DEFAULTS[name]) for name in CHANNELS}
    return CanonicalColor(
        lightness=min(1.0, max(0.0, values["lightness"])),
        chroma=max(0.0, values["chroma"]),
        hue=wrap_hue(values["hue"]),
        alpha=min(1.0, max(0.0, values["alpha"])),
    )


def _from_srgb(rgb: np.ndarray, alpha: float) -> CanonicalColor:
    rgb = np.nan_to_num(np.asarray(rgb, dtype=np.float64), nan=0.0)
    with np.errstate(over="ignore", invalid="ignore"):
        L, C, H = srgb_to_oklch(rgb)
        if not np.isfinite([L, C, H]).all():
            # Channels too large for the transfer curve saturate
            L, C, H = srgb_to_oklch(np.clip(rgb, 0.0, 1.0))
    chroma = float(C)
    hue = float(H)
    if chroma < defaults.ACHROMATIC_CHROMA:
        chroma, hue = 0.0, 0.0
    return normalize({"lightness": float(L), "chroma": chroma, "hue": hue, "alpha": alpha})


def to_canonical(parsed: ParsedColor) -> CanonicalColor:
    """Convert a parsed color from its source space into canonical OKLCH."""
    if parsed.space == "oklch":
        L, C, H = parsed.coords
        return normalize({"lightness": L, "chroma": C, "hue": H, "alpha": parsed.alpha})

    if parsed.space == "hsl":
        H, S, L = (0.0 if math.isnan(v) else v for v in parsed.coords)
        rgb = hsl_to_srgb(H, S, L)
    else:
        rgb = np.asarray(parsed.coords, dtype=np.float64)
    return _from_srgb(rgb, parsed.alpha)


def parse(text: str) -> CanonicalColor:
    """Parse any supported CSS color string into a canonical color.

    Raises:
        InvalidColor: If the string is not a syntactically valid color.
            Out-of-gamut colors are never rejected.
    """
    return to_canonical(parse_css_color(text))


def try_parse(text: str) -> CanonicalColor | None:
    """``parse``, returning None instead of raising ``InvalidColor``."""
    try:
        return parse(text)
    except InvalidColor:
        return None


def format_color(color: PartialColor, target: ColorFormat | str = ColorFormat.OKLCH) -> str:
    """Serialize a color in the target syntax.

    Raises:
        FormatUnsupported: If ``target`` names no known format.
    """
    policy = get_policy(target)
    c = normalize(color)
    return policy.render(c.lightness, c.chroma, c.hue, c.alpha)


def same_color(a: PartialColor, b: PartialColor) -> bool:
    """Whether two colors are indistinguishable at OKLCH display precision."""
    return format_color(a) == format_color(b)


def convert(text: str, target: ColorFormat | str) -> str:
    """Reformat a color string in another syntax.

    Failures are logged and the input string is returned unchanged.
    """
    try:
        return format_color(parse(text), target)
    except FormatUnsupported:
        logger.warning("Unknown color format %r; leaving %r as is", target, text)
    except InvalidColor as exc:
        logger.warning("Cannot convert %r to %s: %s", text, target, exc)
    return text


def to_hex(value: CanonicalColor | str) -> str:
    """Hex for the native color well; ``FALLBACK_HEX`` when a string does not parse."""
    if isinstance(value, str):
        parsed = try_parse(value)
        if parsed is None:
            return defaults.FALLBACK_HEX
        value = parsed
    return format_color(value, ColorFormat.HEX)


def to_srgb(color: PartialColor) -> tuple[float, float, float]:
    """sRGB channels in [0, 1] (clipped) for swatch rendering."""
    c = normalize(color)
    r, g, b = clipped_srgb(c.lightness, c.chroma, c.hue)
    return (float(r), float(g), float(b))


def text_color_for(background: str) -> str:
    """Black or white text for the given background color."""
    color = try_parse(background)
    if color is None:
        logger.debug("Unparsable background %r; using black text", background)
        return "#000000"
    r, g, b = to_srgb(color)
    luma = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return "#000000" if luma > 0.5 else "#FFFFFF"
