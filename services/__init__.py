"""
Service layer sitting between the API routers and the core/enhancement packages.
"""

from .enhancement_service import EnhancementService, TransformResult
from .image_service import ImageService

__all__ = ["EnhancementService", "ImageService", "TransformResult"]
