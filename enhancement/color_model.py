"""
RGB <-> HSV conversion.

Scalar functions convert a single pixel; the array forms apply the same
arithmetic element-wise so whole images can be converted without a Python loop.
Both pairs must stay numerically identical.
"""

from bisect import bisect_right
from typing import Tuple

import numpy as np

from core.constants import PixelConstants

_SECTOR = PixelConstants.HUE_SECTOR_DEGREES
_CIRCLE = PixelConstants.HUE_FULL_CIRCLE
_MAX = float(PixelConstants.MAX_VALUE)
# Upper bounds of hue sectors 0..4; sector 5 takes everything from 300 up
_LAST_SECTOR = 5
_SECTOR_BOUNDS = tuple(_SECTOR * k for k in range(1, _LAST_SECTOR + 1))


def rgb_to_hsv(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """
    Convert one 8-bit RGB pixel to HSV.

    Args:
        r, g, b: Channel values in [0, 255]

    Returns:
        (h, s, v) with h in [0, 360) degrees, s and v in [0, 1].
        Achromatic pixels get h = 0; black gets s = 0.
    """
    r_, g_, b_ = r / _MAX, g / _MAX, b / _MAX

    c_max = max(r_, g_, b_)
    c_min = min(r_, g_, b_)
    delta = c_max - c_min

    if delta == 0:
        hue = 0.0
    elif c_max == r_:
        hue = _SECTOR * (((g_ - b_) / delta) % 6.0)
    elif c_max == g_:
        hue = _SECTOR * (((b_ - r_) / delta) + 2.0)
    else:
        hue = _SECTOR * (((r_ - g_) / delta) + 4.0)

    if hue < 0.0:
        hue += _CIRCLE
    elif hue >= _CIRCLE:
        hue -= _CIRCLE

    saturation = 0.0 if c_max == 0 else delta / c_max

    return hue, saturation, c_max


def hsv_to_rgb(h: float, s: float, v: float) -> Tuple[int, int, int]:
    """
    Convert one HSV triple back to 8-bit RGB.

    Hue outside [0, 300) lands in the last sector. Channels are rounded
    to the nearest 8-bit value.
    """
    c = v * s
    x = c * (1.0 - abs(((h / _SECTOR) % 2.0) - 1.0))
    m = v - c

    sector = _LAST_SECTOR if h < 0.0 else bisect_right(_SECTOR_BOUNDS, h)
    r_, g_, b_ = (
        (c, x, 0.0),
        (x, c, 0.0),
        (0.0, c, x),
        (0.0, x, c),
        (x, 0.0, c),
        (c, 0.0, x),
    )[sector]

    return _to_byte(r_ + m), _to_byte(g_ + m), _to_byte(b_ + m)


def _to_byte(component: float) -> int:
    return int(min(_MAX, max(0.0, round(component * _MAX))))


def rgb_to_hsv_array(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorized rgb_to_hsv.

    Args:
        rgb: (..., 3) uint8 array

    Returns:
        Tuple of float64 arrays (h, s, v), each shaped like rgb[..., 0]
    """
    norm = rgb.astype(np.float64) / _MAX
    r_, g_, b_ = norm[..., 0], norm[..., 1], norm[..., 2]

    c_max = norm.max(axis=-1)
    c_min = norm.min(axis=-1)
    delta = c_max - c_min

    chromatic = delta != 0
    safe_delta = np.where(chromatic, delta, 1.0)

    # Sector selection follows the scalar branch order: R, then G, then B
    is_r = chromatic & (c_max == r_)
    is_g = chromatic & ~is_r & (c_max == g_)
    is_b = chromatic & ~is_r & ~is_g

    hue = np.zeros_like(c_max)
    hue = np.where(is_r, _SECTOR * (((g_ - b_) / safe_delta) % 6.0), hue)
    hue = np.where(is_g, _SECTOR * (((b_ - r_) / safe_delta) + 2.0), hue)
    hue = np.where(is_b, _SECTOR * (((r_ - g_) / safe_delta) + 4.0), hue)
    hue = np.where(hue < 0.0, hue + _CIRCLE, hue)
    hue = np.where(hue >= _CIRCLE, hue - _CIRCLE, hue)

    saturation = np.where(c_max == 0, 0.0, delta / np.where(c_max == 0, 1.0, c_max))

    return hue, saturation, c_max


def hsv_to_rgb_array(h: np.ndarray, s: np.ndarray, v: np.ndarray) -> np.ndarray:
    """
    Vectorized hsv_to_rgb.

    Returns:
        (..., 3) uint8 array
    """
    c = v * s
    x = c * (1.0 - np.abs(((h / _SECTOR) % 2.0) - 1.0))
    m = v - c
    zero = np.zeros_like(c)

    # Same bins as hsv_to_rgb; negative hue also falls into the last sector
    sector = np.searchsorted(_SECTOR_BOUNDS, h, side="right")
    sector = np.where(h < 0.0, _LAST_SECTOR, sector)

    r_ = np.choose(sector, [c, x, zero, zero, x, c])
    g_ = np.choose(sector, [x, c, c, x, zero, zero])
    b_ = np.choose(sector, [zero, zero, x, c, c, x])

    rgb = np.stack([r_ + m, g_ + m, b_ + m], axis=-1)
    return np.clip(np.round(rgb * _MAX), 0, _MAX).astype(np.uint8)
