"""
Centralized enums for Image Enhancement Flow.

Shared by the enhancement engine, services, and API schemas.
"""

from enum import Enum


class PixelFormat(str, Enum):
    """Pixel layouts an image can carry (channel order is always R,G,B[,A])."""

    GRAY = "gray"
    RGB = "rgb"
    RGBA = "rgba"

    @property
    def channels(self) -> int:
        return {"gray": 1, "rgb": 3, "rgba": 4}[self.value]


class TransformMethod(str, Enum):
    """Available enhancement transforms."""

    CONTRAST = "contrast"
    OTSU = "otsu"
    THRESHOLD = "threshold"
    INVERT = "invert"
    BRIGHTNESS = "brightness"


class SaveFormat(str, Enum):
    """Encodings supported when saving or downloading a result."""

    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"
    TIFF = "tiff"
