"""
Immutable raster image value.

Every enhancement transform reads one RasterImage and returns a new one.
The pixel buffer is flagged read-only so inputs cannot be mutated in place.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.constants import ErrorMessages
from core.enums import PixelFormat

_FORMAT_BY_CHANNELS = {3: PixelFormat.RGB, 4: PixelFormat.RGBA}


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    2-D grid of 8-bit pixels with an explicit pixel format.

    Shapes: (H, W) for GRAY, (H, W, 3) for RGB, (H, W, 4) for RGBA.
    Zero-area images (H == 0 or W == 0) are valid.
    """

    pixels: np.ndarray
    pixel_format: PixelFormat

    def __post_init__(self):
        pixels = self.pixels
        expected_ndim = 2 if self.pixel_format == PixelFormat.GRAY else 3
        if (
            pixels.dtype != np.uint8
            or pixels.ndim != expected_ndim
            or (expected_ndim == 3 and pixels.shape[2] != self.pixel_format.channels)
        ):
            raise ValueError(
                ErrorMessages.INVALID_IMAGE_ARRAY.format(dtype=pixels.dtype, shape=pixels.shape)
            )
        # A read-only view can still change through its writeable base
        if pixels.flags.writeable or pixels.base is not None or not pixels.flags.owndata:
            pixels = pixels.copy()
            pixels.flags.writeable = False
            object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_array(
        cls, array: np.ndarray, pixel_format: Optional[PixelFormat] = None
    ) -> "RasterImage":
        """
        Wrap a uint8 array, inferring the pixel format from its shape.

        Raises:
            ValueError: If dtype is not uint8 or the shape has no matching format
        """
        array = np.asarray(array)
        if pixel_format is None:
            if array.ndim == 2:
                pixel_format = PixelFormat.GRAY
            elif array.ndim == 3 and array.shape[2] in _FORMAT_BY_CHANNELS:
                pixel_format = _FORMAT_BY_CHANNELS[array.shape[2]]
            else:
                raise ValueError(
                    ErrorMessages.INVALID_IMAGE_ARRAY.format(dtype=array.dtype, shape=array.shape)
                )
        return cls(pixels=array, pixel_format=pixel_format)

    @classmethod
    def empty(cls, pixel_format: PixelFormat = PixelFormat.RGB) -> "RasterImage":
        """Zero-area image of the given format."""
        shape = (0, 0) if pixel_format == PixelFormat.GRAY else (0, 0, pixel_format.channels)
        return cls(pixels=np.zeros(shape, dtype=np.uint8), pixel_format=pixel_format)

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def channels(self) -> int:
        return self.pixel_format.channels

    @property
    def size(self) -> int:
        """Number of pixels."""
        return self.height * self.width

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    @property
    def has_alpha(self) -> bool:
        return self.pixel_format == PixelFormat.RGBA

    @property
    def nbytes(self) -> int:
        return int(self.pixels.nbytes)

    def rgb(self) -> np.ndarray:
        """Color planes as an (H, W, 3) array; gray is replicated across R, G and B."""
        if self.pixel_format == PixelFormat.GRAY:
            return np.repeat(self.pixels[:, :, np.newaxis], 3, axis=2)
        return self.pixels[:, :, :3]

    def alpha(self) -> Optional[np.ndarray]:
        """Alpha plane for RGBA images, else None."""
        if self.has_alpha:
            return self.pixels[:, :, 3]
        return None

    def copy(self) -> "RasterImage":
        return RasterImage(pixels=self.pixels.copy(), pixel_format=self.pixel_format)

    def with_color(self, rgb: np.ndarray) -> "RasterImage":
        """
        New image of the same format whose color planes are replaced by `rgb`.

        Alpha is carried over untouched. For GRAY images `rgb` may be (H, W)
        or (H, W, 3); in the latter case the first plane is kept.
        """
        if self.pixel_format == PixelFormat.GRAY:
            plane = rgb if rgb.ndim == 2 else rgb[:, :, 0]
            return RasterImage(pixels=plane.astype(np.uint8), pixel_format=PixelFormat.GRAY)
        if self.has_alpha:
            out = np.concatenate([rgb.astype(np.uint8), self.pixels[:, :, 3:4]], axis=2)
            return RasterImage(pixels=out, pixel_format=PixelFormat.RGBA)
        return RasterImage(pixels=rgb.astype(np.uint8), pixel_format=PixelFormat.RGB)

    def describe(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "pixel_format": self.pixel_format.value,
            "channels": self.channels,
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return self.pixel_format == other.pixel_format and np.array_equal(
            self.pixels, other.pixels
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"RasterImage({self.width}x{self.height}, {self.pixel_format.value})"
