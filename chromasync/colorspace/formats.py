"""Per-format serialization rules.

Each output format is a ``FormatPolicy``: which channels to compute from the
canonical OKLCH value, how many decimals each gets, which unit suffix to
append, and when to print alpha. Conversion math stays in ``oklch`` and
``hsl``; adding a CSS format means adding a policy entry here.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Callable, Optional

import numpy as np

from chromasync import defaults
from .errors import FormatUnsupported
from .hsl import srgb_to_hsl
from .oklch import oklch_to_srgb

ChannelFn = Callable[[float, float, float], tuple[float, ...]]


class ColorFormat(str, enum.Enum):
    """CSS color serialization syntaxes supported for output."""

    HSL = "hsl"
    RGB = "rgb"
    OKLCH = "oklch"
    HEX = "hex"

    @classmethod
    def coerce(cls, value: "ColorFormat | str") -> "ColorFormat":
        """Accept a member or a case-insensitive format name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise FormatUnsupported(value)


def round_half_away(value: float, digits: int) -> Decimal:
    """Round to ``digits`` decimals, halves away from zero.

    Uses the shortest repr of the float so ``0.125`` rounds to ``0.13``
    rather than suffering binary representation error. Never returns -0.
    """
    exact = Decimal(repr(float(value)))
    if not exact.is_finite():
        raise ValueError(f"cannot round non-finite value {value!r}")
    with localcontext() as ctx:
        # quantize needs room for every integral digit plus the decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        return rounded.copy_abs()
    return rounded


def format_number(value: Decimal, digits: int, trim_integral: bool) -> str:
    """Render an already-rounded number."""
    if trim_integral and value == value.to_integral_value():
        return str(int(value))
    return f"{value:.{digits}f}"


# === Channel extractors (canonical L, C, H -> output channels) ===

def clipped_srgb(L: float, C: float, H: float) -> np.ndarray:
    """sRGB clipped to [0, 1]; overflow from huge chroma saturates instead of going NaN."""
    with np.errstate(over="ignore", invalid="ignore"):
        rgb = oklch_to_srgb(L, C, H)
    return np.clip(np.nan_to_num(rgb, nan=0.0, posinf=1.0, neginf=0.0), 0.0, 1.0)


def oklch_channels(L: float, C: float, H: float) -> tuple[float, float, float]:
    return (L, C, H)


def rgb_channels(L: float, C: float, H: float) -> tuple[float, float, float]:
    r, g, b = clipped_srgb(L, C, H) * 255
    return (float(r), float(g), float(b))


def hsl_channels(L: float, C: float, H: float) -> tuple[float, float, float]:
    h, s, l = srgb_to_hsl(clipped_srgb(L, C, H))
    return (float(h), float(s) * 100, float(l) * 100)


@dataclass(frozen=True)
class FormatPolicy:
    """Formatting parameters for one output syntax."""

    function: str
    channels: ChannelFn
    precision: tuple[int, ...]
    units: tuple[str, ...] = ("", "", "")
    trim_integral: bool = False
    hue_index: Optional[int] = None
    separator: str = " "
    # Function name used when alpha is printed as a fourth comma argument
    legacy_alpha_function: Optional[str] = None
    alpha_precision: int = defaults.ALPHA_PRECISION
    alpha_threshold: float = defaults.ALPHA_OMIT_THRESHOLD

    def shows_alpha(self, alpha: float) -> bool:
        return alpha < self.alpha_threshold

    def round_channels(self, values: tuple[float, ...]) -> list[Decimal]:
        """Round each channel to its precision, folding a rounded 360 hue to 0."""
        rounded = [round_half_away(v, p) for v, p in zip(values, self.precision)]
        if self.hue_index is not None and rounded[self.hue_index] >= 360:
            rounded[self.hue_index] -= 360
        return rounded

    def render(self, L: float, C: float, H: float, alpha: float) -> str:
        values = self.channels(L, C, H)
        parts = [
            format_number(value, digits, self.trim_integral) + unit
            for value, digits, unit in zip(self.round_channels(values), self.precision, self.units)
        ]

        alpha_text = None
        if self.shows_alpha(alpha):
            alpha_text = f"{round_half_away(alpha, self.alpha_precision):.{self.alpha_precision}f}"

        if alpha_text is not None and self.legacy_alpha_function:
            parts.append(alpha_text)
            return f"{self.legacy_alpha_function}({self.separator.join(parts)})"

        body = self.separator.join(parts)
        if alpha_text is not None:
            body += f" / {alpha_text}"
        return f"{self.function}({body})"


@dataclass(frozen=True)
class HexPolicy(FormatPolicy):
    """``#rrggbb``; alpha is not carried."""

    def shows_alpha(self, alpha: float) -> bool:
        return False

    def render(self, L: float, C: float, H: float, alpha: float) -> str:
        r, g, b = (int(v) for v in self.round_channels(self.channels(L, C, H)))
        return f"#{r:02x}{g:02x}{b:02x}"


FORMAT_POLICIES: dict[ColorFormat, FormatPolicy] = {
    ColorFormat.OKLCH: FormatPolicy(
        function="oklch",
        channels=oklch_channels,
        precision=defaults.OKLCH_PRECISION,
        hue_index=2,
    ),
    ColorFormat.HSL: FormatPolicy(
        function="hsl",
        channels=hsl_channels,
        precision=defaults.HSL_PRECISION,
        units=("", "%", "%"),
        trim_integral=True,
        hue_index=0,
    ),
    ColorFormat.RGB: FormatPolicy(
        function="rgb",
        channels=rgb_channels,
        precision=defaults.RGB_PRECISION,
        separator=", ",
        legacy_alpha_function="rgba",
    ),
    ColorFormat.HEX: HexPolicy(
        function="hex",
        channels=rgb_channels,
        precision=defaults.RGB_PRECISION,
    ),
}


def get_policy(fmt: ColorFormat | str) -> FormatPolicy:
    """Look up the policy for a format.

    Raises:
        FormatUnsupported: If no policy is registered for ``fmt``.
    """
    try:
        return FORMAT_POLICIES[ColorFormat.coerce(fmt)]
    except KeyError:
        raise FormatUnsupported(fmt) from None
