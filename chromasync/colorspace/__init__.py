"""Color model for the theme editor: CSS parsing, OKLCH conversion, formatting.

This module provides:
- CanonicalColor: OKLCH + alpha, the value edited by every color control
- parse / format_color / normalize: the string <-> canonical boundary
- ColorFormat / FormatPolicy: per-syntax output rules (oklch, hsl, rgb, hex)
- OKLCH <-> sRGB and sRGB <-> HSL conversions (numpy)

Example:
    from chromasync.colorspace import CanonicalColor, ColorFormat, format_color, parse

    format_color(parse("rebeccapurple"), ColorFormat.RGB)   # 'rgb(102, 51, 153)'
    format_color(CanonicalColor(0.7, 0.1, 180.0), "oklch")  # 'oklch(0.7000 0.1000 180.00)'
"""

from .oklch import (
    oklch_to_oklab,
    oklab_to_oklch,
    oklab_to_linear_rgb,
    linear_rgb_to_oklab,
    linear_to_srgb,
    srgb_to_linear,
    oklch_to_srgb,
    srgb_to_oklch,
)

from .hsl import hsl_to_srgb, srgb_to_hsl

from .errors import ColorError, InvalidColor, FormatUnsupported

from .css import ParsedColor, parse_css_color

from .formats import (
    ColorFormat,
    FormatPolicy,
    HexPolicy,
    FORMAT_POLICIES,
    get_policy,
    round_half_away,
)

from .model import (
    CHANNELS,
    CanonicalColor,
    normalize,
    wrap_hue,
    parse,
    try_parse,
    to_canonical,
    format_color,
    same_color,
    convert,
    to_hex,
    to_srgb,
    text_color_for,
)

__all__ = [
    # High-level API
    'CanonicalColor',
    'CHANNELS',
    'parse',
    'try_parse',
    'to_canonical',
    'normalize',
    'wrap_hue',
    'format_color',
    'same_color',
    'convert',
    'to_hex',
    'to_srgb',
    'text_color_for',
    # Formats
    'ColorFormat',
    'FormatPolicy',
    'HexPolicy',
    'FORMAT_POLICIES',
    'get_policy',
    'round_half_away',
    # Parsing
    'ParsedColor',
    'parse_css_color',
    # Errors
    'ColorError',
    'InvalidColor',
    'FormatUnsupported',
    # Conversions
    'oklch_to_oklab',
    'oklab_to_oklch',
    'oklab_to_linear_rgb',
    'linear_rgb_to_oklab',
    'linear_to_srgb',
    'srgb_to_linear',
    'oklch_to_srgb',
    'srgb_to_oklch',
    'hsl_to_srgb',
    'srgb_to_hsl',
]
