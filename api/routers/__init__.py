"""
API Routers for Image Enhancement Flow
"""

from . import enhance, image, system

__all__ = ["image", "enhance", "system"]
