"""
Core modules for Image Enhancement Flow
"""

from .image_manager import ImageManager, ImageRecord

__all__ = [
    "ImageManager",
    "ImageRecord",
]
