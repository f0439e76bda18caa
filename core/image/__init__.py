"""
Image utilities - modular architecture.

This package provides focused image utilities:
- raster: Immutable RasterImage value shared by every layer
- converters: Format conversions (PIL, encoded bytes, base64, luma)
- processors: Preview operations (thumbnail, resize)
"""

from core.image.converters import (
    decode_image_bytes,
    encode_image,
    ensure_rgb,
    from_base64,
    pil_to_raster,
    raster_to_pil,
    to_base64,
    to_luma,
)
from core.image.processors import create_thumbnail, resize_image
from core.image.raster import RasterImage

__all__ = [
    "RasterImage",
    "decode_image_bytes",
    "encode_image",
    "ensure_rgb",
    "from_base64",
    "pil_to_raster",
    "raster_to_pil",
    "to_base64",
    "to_luma",
    "create_thumbnail",
    "resize_image",
]
