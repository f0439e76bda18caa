"""
Point transforms: every output pixel depends only on the matching input pixel.

Inversion and brightness keep the pixel format (alpha is never touched).
Thresholding always produces a single-channel GRAY image.
"""

import logging

import numpy as np
from pydantic import Field

from core.constants import EnhancementDefaults, PixelConstants
from core.enums import PixelFormat
from core.image.converters import to_luma
from core.image.raster import RasterImage
from schemas.base import BaseTransformParams

logger = logging.getLogger(__name__)


class ThresholdParams(BaseTransformParams):
    """Manual threshold slider value."""

    threshold: int = Field(
        default=EnhancementDefaults.THRESHOLD,
        ge=EnhancementDefaults.THRESHOLD_MIN,
        le=EnhancementDefaults.THRESHOLD_MAX,
        description="Intensity cut; pixels strictly above it become white",
    )


class BrightnessParams(BaseTransformParams):
    """Brightness slider value."""

    delta: int = Field(
        default=EnhancementDefaults.BRIGHTNESS_DELTA,
        ge=EnhancementDefaults.BRIGHTNESS_MIN,
        le=EnhancementDefaults.BRIGHTNESS_MAX,
        description="Signed offset added to every color channel (saturating)",
    )


def invert(image: RasterImage) -> RasterImage:
    """
    Negative image: each color channel becomes 255 - value.

    Applying it twice returns the original exactly.
    """
    planes = image.pixels if _is_gray(image) else image.rgb()
    return image.with_color(PixelConstants.MAX_VALUE - planes)


def adjust_brightness(image: RasterImage, delta: int) -> RasterImage:
    """
    Add a signed offset to every color channel, clamping to [0, 255].

    Args:
        image: Input image
        delta: Offset; any integer is accepted, the result saturates

    Returns:
        New image in the same format
    """
    if delta == 0:
        return image.copy()

    planes = image.pixels if _is_gray(image) else image.rgb()
    shifted = np.clip(
        planes.astype(np.int32) + int(delta), PixelConstants.MIN_VALUE, PixelConstants.MAX_VALUE
    ).astype(np.uint8)

    return image.with_color(shifted)


def binarize(luma: np.ndarray, threshold: int) -> RasterImage:
    """
    Shared thresholding rule: intensity > threshold -> 255, else 0.

    Args:
        luma: (H, W) uint8 intensity plane
        threshold: Cut value in [0, 255]

    Returns:
        GRAY image containing only 0 and 255
    """
    binary = np.where(luma > threshold, PixelConstants.MAX_VALUE, PixelConstants.MIN_VALUE)
    return RasterImage(pixels=binary.astype(np.uint8), pixel_format=PixelFormat.GRAY)


def manual_threshold(image: RasterImage, threshold: int) -> RasterImage:
    """
    Convert to luma, then binarize at a fixed threshold.

    The output is always GRAY regardless of the input format.
    """
    logger.debug(f"Manual threshold at {threshold} on {image!r}")
    return binarize(to_luma(image), threshold)


def _is_gray(image: RasterImage) -> bool:
    return image.pixel_format == PixelFormat.GRAY
