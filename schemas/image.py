"""
Image session API models.

This module contains models for image operations:
- Loading (base64 or filesystem path)
- Saving and downloading results
- Reset and session metadata
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from core.enums import SaveFormat

from .common import ImageInfo


class ImageLoadRequest(BaseModel):
    """Request to load an image from base64 data or a path on the server"""

    image_base64: Optional[str] = Field(
        default=None, description="Encoded image file as base64 (data URLs accepted)"
    )
    path: Optional[str] = Field(
        default=None, description="Path of an image file inside the storage directory"
    )

    @model_validator(mode="after")
    def check_single_source(self):
        if (self.image_base64 is None) == (self.path is None):
            raise ValueError("Provide exactly one of image_base64 or path")
        return self


class ImageLoadResponse(BaseModel):
    """Response after loading an image"""

    success: bool = True
    image_id: str
    info: ImageInfo
    thumbnail_base64: Optional[str] = None


class ImageSaveRequest(BaseModel):
    """Request to save the current result of a session"""

    path: str = Field(
        ..., min_length=1, description="Destination inside the storage directory; .png is added if missing"
    )
    format: Optional[SaveFormat] = Field(
        default=None, description="Encoding; inferred from the extension when omitted"
    )


class ImageSaveResponse(BaseModel):
    """Response after saving"""

    success: bool = True
    image_id: str
    saved_path: str
    info: ImageInfo


class ImageResultResponse(BaseModel):
    """Current result of a session, encoded"""

    image_id: str
    format: SaveFormat
    info: ImageInfo
    image_base64: str


class ImageResetResponse(BaseModel):
    """Response after resetting a session to its original"""

    success: bool = True
    image_id: str
    info: ImageInfo
    thumbnail_base64: Optional[str] = None


class ImageMetadata(BaseModel):
    """Session description"""

    image_id: str
    source: Optional[str] = None
    original: ImageInfo
    processed: ImageInfo
    last_method: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)
    transform_count: int = 0
    is_modified: bool = False
    created_at: datetime
    last_access: datetime
    size_bytes: int


class ImageListResponse(BaseModel):
    """All stored sessions"""

    images: List[ImageMetadata]
    count: int
