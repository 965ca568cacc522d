"""Parse CSS color strings.

Supported syntax:
- Named colors (CSS3 table plus ``rebeccapurple``) and ``transparent``
- Hex: ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``
- ``rgb()`` / ``rgba()``: legacy comma syntax or space syntax with ``/ alpha``
- ``hsl()`` / ``hsla()``: hue with optional deg/rad/grad/turn unit
- ``oklch()``: L as number or percentage, C as number or percentage

Channels may be ``none`` (missing); missing channels come back as NaN and
are replaced by defaults when the color is normalized.
"""

import math
import re
from typing import NamedTuple

import webcolors

from chromasync import defaults
from .errors import InvalidColor

_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_FUNCTION_RE = re.compile(r"^([a-z]+)\(\s*(.*?)\s*\)$", re.DOTALL)
_TOKEN_RE = re.compile(
    r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)(%|deg|rad|grad|turn)?$"
)

_ANGLE_TO_DEGREES = {
    None: 1.0,
    "deg": 1.0,
    "rad": 180.0 / math.pi,
    "grad": 0.9,
    "turn": 360.0,
}

_FUNCTION_SPACES = {
    "rgb": "rgb",
    "rgba": "rgb",
    "hsl": "hsl",
    "hsla": "hsl",
    "oklch": "oklch",
}

# CSS Color 4 names missing from the CSS3 table
_EXTRA_NAMES = {
    "rebeccapurple": "#663399",
}


class ParsedColor(NamedTuple):
    """A color in its source space, before conversion to OKLCH.

    ``rgb`` coords are sRGB in [0, 1] (not clamped), ``hsl`` coords are
    (hue degrees, saturation 0-1, lightness 0-1), ``oklch`` coords are
    (L, C, H degrees).
    """

    space: str
    coords: tuple[float, float, float]
    alpha: float


def parse_css_color(text: str) -> ParsedColor:
    """Parse a CSS color string.

    Raises:
        InvalidColor: If the string is not a supported color.
    """
    if not isinstance(text, str):
        raise InvalidColor(repr(text), "not a string")

    value = text.strip().lower()
    if not value:
        raise InvalidColor(text, "empty")

    if value.startswith("#"):
        return _parse_hex(text, value)

    match = _FUNCTION_RE.match(value)
    if match is not None:
        name, body = match.groups()
        space = _FUNCTION_SPACES.get(name)
        if space is None:
            raise InvalidColor(text, f"unknown function {name}()")
        return _parse_function(text, space, body)

    if value == "transparent":
        return ParsedColor("rgb", (0.0, 0.0, 0.0), 0.0)

    try:
        if value in _EXTRA_NAMES:
            named = webcolors.hex_to_rgb(_EXTRA_NAMES[value])
        else:
            named = webcolors.name_to_rgb(value)
    except ValueError:
        raise InvalidColor(text, "unknown color name") from None
    return ParsedColor(
        "rgb",
        (named.red / 255, named.green / 255, named.blue / 255),
        1.0,
    )


def _parse_hex(text: str, value: str) -> ParsedColor:
    match = _HEX_RE.match(value)
    if match is None:
        raise InvalidColor(text, "bad hex")

    digits = match.group(1)
    if len(digits) <= 4:
        digits = "".join(ch * 2 for ch in digits)

    channels = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    alpha = channels[3] if len(channels) == 4 else 1.0
    return ParsedColor("rgb", (channels[0], channels[1], channels[2]), alpha)


def _split_arguments(text: str, body: str) -> tuple[list[str], str | None]:
    """Split a function body into three channel tokens and an optional alpha token."""
    if "," in body:
        parts = [part.strip() for part in body.split(",")]
        if len(parts) not in (3, 4) or "/" in body:
            raise InvalidColor(text, "expected 3 or 4 comma-separated values")
        return parts[:3], (parts[3] if len(parts) == 4 else None)

    alpha_token = None
    if "/" in body:
        channels_part, _, alpha_part = body.partition("/")
        alpha_token = alpha_part.strip()
        if not alpha_token or "/" in alpha_token or len(alpha_token.split()) != 1:
            raise InvalidColor(text, "bad alpha")
    else:
        channels_part = body

    parts = channels_part.split()
    if len(parts) != 3:
        raise InvalidColor(text, "expected 3 channel values")
    return parts, alpha_token


def _token(text: str, token: str) -> tuple[float, str | None]:
    """Split a numeric token into (number, unit). ``none`` yields NaN."""
    if token == "none":
        return math.nan, None
    match = _TOKEN_RE.match(token)
    if match is None:
        raise InvalidColor(text, f"bad value {token!r}")
    number, unit = match.groups()
    return float(number), unit


def _number_or_percent(text: str, token: str, percent_ref: float) -> float:
    number, unit = _token(text, token)
    if unit == "%":
        return number / 100 * percent_ref
    if unit is not None:
        raise InvalidColor(text, f"unexpected unit in {token!r}")
    return number


def _hue(text: str, token: str) -> float:
    number, unit = _token(text, token)
    if unit == "%":
        raise InvalidColor(text, f"hue cannot be a percentage: {token!r}")
    return number * _ANGLE_TO_DEGREES[unit]


def _alpha(text: str, token: str | None) -> float:
    if token is None:
        return 1.0
    return _number_or_percent(text, token, 1.0)


def _parse_function(text: str, space: str, body: str) -> ParsedColor:
    channels, alpha_token = _split_arguments(text, body)
    alpha = _alpha(text, alpha_token)

    if space == "rgb":
        coords = tuple(_number_or_percent(text, token, 255.0) / 255.0 for token in channels)
    elif space == "hsl":
        hue = _hue(text, channels[0])
        # Modern syntax allows bare numbers on the 0-100 scale
        saturation = _number_or_percent(text, channels[1], 100.0) / 100.0
        lightness = _number_or_percent(text, channels[2], 100.0) / 100.0
        coords = (hue, saturation, lightness)
    else:
        lightness = _number_or_percent(text, channels[0], 1.0)
        chroma = _number_or_percent(text, channels[1], defaults.OKLCH_CHROMA_PERCENT_REF)
        coords = (lightness, chroma, _hue(text, channels[2]))

    return ParsedColor(space, coords, alpha)
