"""
Linear contrast stretch on the HSV Value channel.

Two passes: a global min/max scan of V, then a per-pixel remap of V onto
[0, 1]. Hue and saturation are left alone.
"""

import logging
from typing import Tuple

from core.image.raster import RasterImage
from enhancement.color_model import hsv_to_rgb_array, rgb_to_hsv_array

logger = logging.getLogger(__name__)


def value_range(image: RasterImage) -> Tuple[float, float]:
    """
    Global (min_v, max_v) of the HSV Value channel.

    Starts from min_v = 1.0 and max_v = 0.0, so an image with no pixels
    reports max_v < min_v.
    """
    min_v, max_v = 1.0, 0.0
    if image.is_empty:
        return min_v, max_v

    _, _, v = rgb_to_hsv_array(image.rgb())
    return min(min_v, float(v.min())), max(max_v, float(v.max()))


def stretch_contrast(image: RasterImage) -> RasterImage:
    """
    Stretch V to fill [0, 1] using the image's own V range.

    Flat, black, or zero-area images (max_v <= min_v) come back unchanged.

    Args:
        image: Input image (any format; alpha is carried over)

    Returns:
        New image in the same format
    """
    min_v, max_v = value_range(image)

    if max_v <= min_v:
        logger.debug(f"Contrast stretch skipped: flat value range [{min_v}, {max_v}]")
        return image.copy()

    h, s, v = rgb_to_hsv_array(image.rgb())
    v = (v - min_v) / (max_v - min_v)

    logger.debug(f"Stretched value range [{min_v:.3f}, {max_v:.3f}] to [0, 1]")
    return image.with_color(hsv_to_rgb_array(h, s, v))
