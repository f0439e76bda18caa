"""
Enhancement API models.

Request models combine the session reference with the transform's own
parameter model, so slider ranges are validated in one place.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from core.enums import TransformMethod
from enhancement.point_transforms import BrightnessParams, ThresholdParams

from .common import ImageInfo, ImageRequest


class ContrastRequest(ImageRequest):
    """Linear contrast stretch request"""


class OtsuRequest(ImageRequest):
    """Otsu automatic threshold request"""


class InvertRequest(ImageRequest):
    """Inversion request"""


class ThresholdRequest(ImageRequest, ThresholdParams):
    """Manual threshold request"""


class BrightnessRequest(ImageRequest, BrightnessParams):
    """Brightness shift request"""


class TransformResponse(BaseModel):
    """Result of one transform applied to a session's original"""

    image_id: str
    method: TransformMethod
    info: ImageInfo
    format_changed: bool = Field(
        ..., description="True when the output pixel format differs from the input"
    )
    threshold: Optional[int] = Field(
        default=None, description="Threshold used (threshold and otsu methods)"
    )
    processing_time_ms: float
    thumbnail_base64: Optional[str] = None


class HistogramResponse(BaseModel):
    """Intensity histogram of a session image"""

    image_id: str
    source: str = Field(..., description="'original' or 'processed'")
    counts: List[int]
    total: int
    mean: Optional[float] = None
    otsu_threshold: Optional[int] = None
