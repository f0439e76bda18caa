"""
Constants and configuration values for Image Enhancement Flow.
Centralizes all magic numbers and configuration constants.
"""


# Image Management Constants
class ImageConstants:
    """Constants related to image storage and processing."""

    # Storage limits
    DEFAULT_MAX_IMAGES = 100
    DEFAULT_MAX_MEMORY_MB = 1000
    MIN_IMAGES = 1
    MAX_IMAGES = 1000

    # Thumbnail settings
    DEFAULT_THUMBNAIL_WIDTH = 320
    MIN_THUMBNAIL_WIDTH = 50
    MAX_THUMBNAIL_WIDTH = 2000
    THUMBNAIL_JPEG_QUALITY = 70

    # Saving
    DEFAULT_SAVE_FORMAT = "png"
    # Root for server-side load/save paths (relative to the working directory)
    DEFAULT_STORAGE_DIR = "var/images"
    JPEG_SAVE_QUALITY = 95


# Pixel Constants
class PixelConstants:
    """8-bit sample range and histogram size."""

    MIN_VALUE = 0
    MAX_VALUE = 255
    LEVELS = 256

    # Hue sectors
    HUE_SECTOR_DEGREES = 60.0
    HUE_FULL_CIRCLE = 360.0

    # Rec. 709 luma, integer weights over LUMA_SCALE (truncated)
    LUMA_WEIGHTS = (2126, 7152, 722)
    LUMA_SCALE = 10000


# Enhancement Default Parameters
class EnhancementDefaults:
    """Default parameters for the enhancement transforms."""

    # Manual threshold slider (0..=255)
    THRESHOLD = 128
    THRESHOLD_MIN = 0
    THRESHOLD_MAX = 255

    # Brightness slider (-255..=255)
    BRIGHTNESS_DELTA = 0
    BRIGHTNESS_MIN = -255
    BRIGHTNESS_MAX = 255

    # Otsu degenerate-case result (uniform histogram)
    OTSU_FALLBACK_THRESHOLD = 0


# API Constants
class APIConstants:
    """Constants for API endpoints."""

    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 8000

    # File uploads
    MAX_UPLOAD_SIZE_MB = 50


# System Constants
class SystemConstants:
    """Constants for system operations."""

    # Logging
    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    # Image errors
    IMAGE_NOT_FOUND = "Image with ID {image_id} not found"
    IMAGE_DECODE_FAILED = "Failed to decode image: {error}"
    IMAGE_SAVE_FAILED = "Failed to save image to {path}: {error}"
    INVALID_IMAGE_ARRAY = "Unsupported image array: dtype={dtype}, shape={shape}"

    # Processing errors
    UNKNOWN_METHOD = "Unknown enhancement method: {method}"
    INVALID_PARAMETER = "Invalid parameter {param}: {value}"


# Success Messages
class SuccessMessages:
    """Standard success messages."""

    IMAGE_LOADED = "Loaded image {image_id}"
    IMAGE_RESET = "Image {image_id} reset to original"
    IMAGE_SAVED = "Saved image {image_id} to {path}"
    IMAGE_DELETED = "Deleted image {image_id}"
