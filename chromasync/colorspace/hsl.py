"""sRGB <-> HSL conversions (CSS Color 4 definitions).

Hue in degrees, saturation and lightness in [0, 1]. Works on numpy arrays
or plain floats.
"""

import numpy as np
from numpy.typing import ArrayLike

# Channel spreads below this are float noise (e.g. white through OKLCH)
_ACHROMATIC_EPS = 1e-9


def hsl_to_srgb(H: ArrayLike, S: ArrayLike, L: ArrayLike) -> np.ndarray:
    """HSL -> sRGB. Returns array with shape (..., 3)."""
    H = np.asarray(H, dtype=np.float64) % 360
    S = np.asarray(S, dtype=np.float64)
    L = np.asarray(L, dtype=np.float64)

    a = S * np.minimum(L, 1 - L)

    def channel(n: int) -> np.ndarray:
        k = (n + H / 30) % 12
        return L - a * np.maximum(-1.0, np.minimum(np.minimum(k - 3, 9 - k), 1.0))

    return np.stack([channel(0), channel(8), channel(4)], axis=-1)


def srgb_to_hsl(rgb: ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """sRGB -> HSL.

    Achromatic input (max == min, within float noise) gets hue 0 and
    saturation 0.

    Returns:
        (H, S, L) tuple, H in [0, 360)
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    d = mx - mn
    L = (mx + mn) / 2

    chromatic = d > _ACHROMATIC_EPS
    safe_d = np.where(chromatic, d, 1.0)
    denom = 1 - np.abs(2 * L - 1)
    S = np.where(chromatic & (denom > 0), d / np.where(denom > 0, denom, 1.0), 0.0)

    H = np.where(
        mx == r,
        ((g - b) / safe_d) % 6,
        np.where(mx == g, (b - r) / safe_d + 2, (r - g) / safe_d + 4),
    ) * 60
    H = np.where(chromatic, H % 360, 0.0)

    return H, S, L
