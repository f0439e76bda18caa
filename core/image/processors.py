"""
Preview helpers: base64 thumbnails and downscaled copies of results.
"""

import logging
from typing import Optional

import cv2
from PIL import Image

from core.constants import ImageConstants
from core.image.converters import raster_to_pil, to_base64
from core.image.raster import RasterImage

logger = logging.getLogger(__name__)


def create_thumbnail(
    image: RasterImage, width: int = ImageConstants.DEFAULT_THUMBNAIL_WIDTH
) -> Optional[str]:
    """
    Create a base64 thumbnail for previewing an image.

    Args:
        image: Input image
        width: Target width in pixels (aspect ratio is kept)

    Returns:
        Base64 JPEG (PNG when the image has alpha), or None for zero-area images
    """
    if image.is_empty:
        return None

    try:
        pil_image = raster_to_pil(image)

        aspect_ratio = pil_image.height / pil_image.width
        height = max(1, int(width * aspect_ratio))

        # Never upscales
        pil_image.thumbnail((width, height), Image.Resampling.LANCZOS)

        if image.has_alpha:
            return to_base64(pil_image, format="PNG")
        return to_base64(pil_image, format="JPEG", quality=ImageConstants.THUMBNAIL_JPEG_QUALITY)

    except Exception as e:
        logger.error(f"Failed to create thumbnail: {e}")
        raise


def resize_image(image: RasterImage, max_dimension: int) -> RasterImage:
    """
    Downscale so that neither side exceeds max_dimension, keeping aspect.

    Images already within bounds (and zero-area images) are returned as is.
    """
    h, w = image.height, image.width
    if image.is_empty or max(h, w) <= max_dimension:
        return image

    scale = max_dimension / max(h, w)
    size = (max(1, round(w * scale)), max(1, round(h * scale)))
    resized = cv2.resize(image.pixels, size, interpolation=cv2.INTER_AREA)

    logger.debug(f"Resized {w}x{h} to {size[0]}x{size[1]}")
    return RasterImage(pixels=resized, pixel_format=image.pixel_format)
