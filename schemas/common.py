"""
Common data structures shared across API schemas.
"""

from pydantic import BaseModel, Field

from core.enums import PixelFormat
from core.image.raster import RasterImage


class ImageInfo(BaseModel):
    """Dimensions and pixel format of an image"""

    width: int = Field(..., ge=0, description="Width in pixels")
    height: int = Field(..., ge=0, description="Height in pixels")
    pixel_format: PixelFormat = Field(..., description="Pixel layout (gray, rgb, rgba)")
    channels: int = Field(..., ge=1, le=4, description="Samples per pixel")

    @classmethod
    def from_image(cls, image: RasterImage) -> "ImageInfo":
        return cls(
            width=image.width,
            height=image.height,
            pixel_format=image.pixel_format,
            channels=image.channels,
        )


class ImageRequest(BaseModel):
    """Request referencing a stored image session"""

    image_id: str = Field(..., description="Image session identifier")
