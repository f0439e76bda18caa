"""
Image format conversion utilities.

Handles conversions between different image representations:
- RasterImage (engine value, RGB channel order)
- PIL Images
- Encoded bytes and base64 strings
- Luma (grayscale) planes
"""

import base64
import binascii
import io
import logging
from typing import Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from core.constants import ImageConstants, PixelConstants
from core.enums import PixelFormat, SaveFormat
from core.image.raster import RasterImage

logger = logging.getLogger(__name__)

# PIL modes that collapse to a single 8-bit channel
_GRAY_MODES = {"1", "I", "F", "I;16", "I;16B", "I;16L"}
# PIL modes that carry transparency
_ALPHA_MODES = {"LA", "La", "PA", "RGBa"}


def pil_to_raster(image: Image.Image) -> RasterImage:
    """
    Convert PIL Image to RasterImage.

    Args:
        image: PIL Image in any mode

    Returns:
        RasterImage in GRAY, RGB or RGBA format
    """
    mode = image.mode
    if mode in ("L", "RGB", "RGBA"):
        converted = image
    elif mode in _GRAY_MODES:
        converted = image.convert("L")
    elif mode in _ALPHA_MODES or (mode == "P" and "transparency" in image.info):
        converted = image.convert("RGBA")
    else:
        converted = image.convert("RGB")

    if converted is not image:
        logger.debug(f"Converted PIL mode {mode} to {converted.mode}")

    return RasterImage.from_array(np.array(converted, dtype=np.uint8))


def raster_to_pil(image: RasterImage) -> Image.Image:
    """
    Convert RasterImage to PIL Image.

    Args:
        image: RasterImage

    Returns:
        PIL Image in mode L, RGB or RGBA
    """
    # Mode follows from the array shape: (H, W) -> L, (H, W, 3) -> RGB, (H, W, 4) -> RGBA
    return Image.fromarray(np.ascontiguousarray(image.pixels))


def decode_image_bytes(data: bytes) -> RasterImage:
    """
    Decode an encoded image file (PNG, JPEG, BMP, ...) to RasterImage.

    Raises:
        ValueError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            return pil_to_raster(image)
    except (UnidentifiedImageError, OSError) as e:
        logger.error(f"Failed to decode image bytes: {e}")
        raise ValueError(f"Unsupported or corrupt image data: {e}") from e


def encode_image(image: RasterImage, format: Union[SaveFormat, str] = SaveFormat.PNG) -> bytes:
    """
    Encode RasterImage into file bytes.

    JPEG has no alpha channel, so RGBA images are flattened to RGB first.

    Args:
        image: Image to encode
        format: Target format

    Returns:
        Encoded bytes
    """
    save_format = SaveFormat(format.lower() if isinstance(format, str) else format)
    if save_format == SaveFormat.JPEG and image.has_alpha:
        image = ensure_rgb(image)
    pil_image = raster_to_pil(image)

    save_kwargs = {"format": save_format.value.upper()}
    if save_format == SaveFormat.JPEG:
        save_kwargs["quality"] = ImageConstants.JPEG_SAVE_QUALITY

    buffer = io.BytesIO()
    pil_image.save(buffer, **save_kwargs)
    return buffer.getvalue()


def to_base64(
    image: Union[RasterImage, Image.Image, bytes], format: str = "PNG", quality: int = 85
) -> str:
    """
    Convert image to base64 string.

    Args:
        image: Input image (RasterImage, PIL Image, or raw bytes)
        format: Image format (JPEG, PNG, etc.)
        quality: JPEG quality (1-100, ignored for PNG)

    Returns:
        Base64 encoded string
    """
    try:
        # If already bytes, directly encode
        if isinstance(image, bytes):
            return base64.b64encode(image).decode("utf-8")

        if isinstance(image, RasterImage):
            image = raster_to_pil(image)

        buffer = io.BytesIO()
        save_kwargs = {"format": format}

        if format.upper() == "JPEG":
            if image.mode == "RGBA":
                image = image.convert("RGB")
            save_kwargs["quality"] = quality
            save_kwargs["optimize"] = True

        image.save(buffer, **save_kwargs)
        return base64.b64encode(buffer.getvalue()).decode("utf-8")

    except Exception as e:
        logger.error(f"Failed to convert image to base64: {e}")
        raise


def from_base64(base64_string: str) -> RasterImage:
    """
    Convert base64 string to RasterImage.

    Accepts both bare base64 and data URLs ("data:image/png;base64,...").

    Raises:
        ValueError: If the string is not valid base64 or not an image
    """
    if base64_string.startswith("data:") and "," in base64_string:
        base64_string = base64_string.split(",", 1)[1]

    try:
        image_bytes = base64.b64decode(base64_string, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.error(f"Failed to decode base64 image: {e}")
        raise ValueError(f"Invalid base64 data: {e}") from e

    return decode_image_bytes(image_bytes)


def to_luma(image: RasterImage) -> np.ndarray:
    """
    Single-channel intensity plane of an image.

    GRAY images pass through. RGB/RGBA use Rec. 709 integer weights,
    (2126*R + 7152*G + 722*B) // 10000; alpha is ignored.

    Args:
        image: Input image

    Returns:
        (H, W) uint8 array
    """
    if image.pixel_format == PixelFormat.GRAY:
        return image.pixels

    weights = np.array(PixelConstants.LUMA_WEIGHTS, dtype=np.uint32)
    weighted = image.rgb().astype(np.uint32) @ weights
    return (weighted // PixelConstants.LUMA_SCALE).astype(np.uint8)


def ensure_rgb(image: RasterImage) -> RasterImage:
    """
    Ensure image is in RGB format (expand gray, drop alpha).

    Args:
        image: Input image (any format)

    Returns:
        RGB image
    """
    if image.pixel_format == PixelFormat.RGB:
        return image
    if image.is_empty:
        return RasterImage(
            pixels=np.zeros((image.height, image.width, 3), dtype=np.uint8),
            pixel_format=PixelFormat.RGB,
        )
    if image.pixel_format == PixelFormat.GRAY:
        rgb = cv2.cvtColor(image.pixels, cv2.COLOR_GRAY2RGB)
    else:
        rgb = cv2.cvtColor(image.pixels, cv2.COLOR_RGBA2RGB)
    return RasterImage(pixels=rgb, pixel_format=PixelFormat.RGB)
