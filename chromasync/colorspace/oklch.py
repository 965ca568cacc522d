"""OKLCH <-> sRGB conversions.

Reference: https://bottosson.github.io/posts/oklab/

Every function takes numpy arrays or plain floats and broadcasts; scalar
input comes back as 0-d arrays. Nothing is clipped here: out-of-gamut
values pass through so callers decide when to clamp.
"""

from math import pi

import numpy as np
from numpy.typing import ArrayLike

# Björn Ottosson's reference matrices, row-major
_RGB_TO_LMS = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
])
_LMS_TO_OKLAB = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])
_OKLAB_TO_LMS = np.array([
    [1.0, 0.3963377774, 0.2158037573],
    [1.0, -0.1055613458, -0.0638541728],
    [1.0, -0.0894841775, -1.2914855480],
])
_LMS_TO_RGB = np.array([
    [4.0767416621, -3.3077115913, 0.2309699292],
    [-1.2684380046, 2.6097574011, -0.3413193965],
    [-0.0041960863, -0.7034186147, 1.7076147010],
])

Channels = tuple[np.ndarray, np.ndarray, np.ndarray]

# sRGB transfer function breakpoints
_ENCODE_KNEE = 0.0031308
_DECODE_KNEE = 0.04045


def _transform(matrix: np.ndarray, x: ArrayLike, y: ArrayLike, z: ArrayLike) -> Channels:
    """Multiply stacked (x, y, z) channel vectors by ``matrix``."""
    stacked = np.stack(np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    ), axis=-1)
    out = stacked @ matrix.T
    return out[..., 0], out[..., 1], out[..., 2]


def _split(rgb: ArrayLike) -> Channels:
    rgb = np.asarray(rgb, dtype=np.float64)
    return rgb[..., 0], rgb[..., 1], rgb[..., 2]


# === Polar <-> rectangular ===

def oklch_to_oklab(L: ArrayLike, C: ArrayLike, H: ArrayLike) -> Channels:
    """H in degrees."""
    hue = np.asarray(H, dtype=np.float64) * (pi / 180)
    chroma = np.asarray(C, dtype=np.float64)
    return np.asarray(L, dtype=np.float64), chroma * np.cos(hue), chroma * np.sin(hue)


def oklab_to_oklch(L: ArrayLike, a: ArrayLike, b: ArrayLike) -> Channels:
    """Hue comes back in [0, 360)."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    hue = np.degrees(np.arctan2(b, a)) % 360
    return np.asarray(L, dtype=np.float64), np.hypot(a, b), hue


# === OKLab <-> linear sRGB ===

def oklab_to_linear_rgb(L: ArrayLike, a: ArrayLike, b: ArrayLike) -> Channels:
    l_, m_, s_ = _transform(_OKLAB_TO_LMS, L, a, b)
    return _transform(_LMS_TO_RGB, l_**3, m_**3, s_**3)


def linear_rgb_to_oklab(r: ArrayLike, g: ArrayLike, b: ArrayLike) -> Channels:
    l, m, s = _transform(_RGB_TO_LMS, r, g, b)
    # cbrt keeps the sign of out-of-gamut (negative) LMS responses
    return _transform(_LMS_TO_OKLAB, np.cbrt(l), np.cbrt(m), np.cbrt(s))


# === sRGB transfer function ===

def linear_to_srgb(x: ArrayLike) -> np.ndarray:
    """Gamma-encode linear light."""
    x = np.asarray(x, dtype=np.float64)
    curve = 1.055 * np.power(np.maximum(x, 1e-10), 1 / 2.4) - 0.055
    return np.where(x <= _ENCODE_KNEE, x * 12.92, curve)


def srgb_to_linear(x: ArrayLike) -> np.ndarray:
    """Gamma-decode; sign-preserving so rgb(300 -20 0) stays finite."""
    x = np.asarray(x, dtype=np.float64)
    curve = np.sign(x) * np.power((np.abs(x) + 0.055) / 1.055, 2.4)
    return np.where(x <= _DECODE_KNEE, x / 12.92, curve)


# === Composites ===

def oklch_to_srgb(L: ArrayLike, C: ArrayLike, H: ArrayLike) -> np.ndarray:
    """OKLCH -> gamma-encoded sRGB.

    Args:
        L: Lightness (0-1)
        C: Chroma (0 to about 0.4 inside sRGB)
        H: Hue in degrees

    Returns:
        Array with shape (..., 3); channels fall outside [0, 1] for
        out-of-gamut input.
    """
    linear = oklab_to_linear_rgb(*oklch_to_oklab(L, C, H))
    return np.stack([linear_to_srgb(channel) for channel in linear], axis=-1)


def srgb_to_oklch(rgb: ArrayLike) -> Channels:
    """Gamma-encoded sRGB with shape (..., 3) -> (L, C, H)."""
    linear = (srgb_to_linear(channel) for channel in _split(rgb))
    return oklab_to_oklch(*linear_rgb_to_oklab(*linear))
