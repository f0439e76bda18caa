"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain for better maintainability.

Request/response models for the enhancement endpoints live in `schemas.enhance`
and are imported from there directly: they embed the parameter models of the
enhancement engine, which itself depends on `schemas.base`.
"""

# Base schemas
from .base import BaseTransformParams

# Common models (core data structures)
from .common import ImageInfo, ImageRequest

# Image session models
from .image import (
    ImageListResponse,
    ImageLoadRequest,
    ImageLoadResponse,
    ImageMetadata,
    ImageResetResponse,
    ImageResultResponse,
    ImageSaveRequest,
    ImageSaveResponse,
)

# Explicitly declare public API for re-export
__all__ = [
    # Base schemas
    "BaseTransformParams",
    # Common models
    "ImageInfo",
    "ImageRequest",
    # Image models
    "ImageListResponse",
    "ImageLoadRequest",
    "ImageLoadResponse",
    "ImageMetadata",
    "ImageResetResponse",
    "ImageResultResponse",
    "ImageSaveRequest",
    "ImageSaveResponse",
]
