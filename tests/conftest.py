"""
Pytest configuration and fixtures for Image Enhancement Flow tests
"""

import io

import cv2
import numpy as np
import pytest
from PIL import Image

from core.enums import PixelFormat
from core.image.raster import RasterImage
from core.image_manager import ImageManager
from services.enhancement_service import EnhancementService
from services.image_service import ImageService


@pytest.fixture
def test_image():
    """RGB test image with a white square, a gray circle and a red bar"""
    image = np.zeros((120, 160, 3), dtype=np.uint8)
    cv2.rectangle(image, (20, 20), (70, 70), (255, 255, 255), -1)
    cv2.circle(image, (115, 80), 25, (128, 128, 128), -1)
    image[100:110, 10:150] = (200, 30, 30)
    return RasterImage.from_array(image)


@pytest.fixture
def gray_gradient():
    """GRAY image whose values span 50..200"""
    row = np.linspace(50, 200, 151).round().astype(np.uint8)
    return RasterImage.from_array(np.tile(row, (10, 1)))


@pytest.fixture
def bimodal_gray():
    """GRAY image: left half 50, right half 200"""
    pixels = np.full((20, 40), 50, dtype=np.uint8)
    pixels[:, 20:] = 200
    return RasterImage.from_array(pixels)


@pytest.fixture
def rgba_image():
    """RGBA image with a varying alpha plane"""
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
    return RasterImage.from_array(pixels)


@pytest.fixture
def empty_rgb():
    return RasterImage.empty(PixelFormat.RGB)


def encode_png(array: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(array).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes(test_image):
    """test_image encoded as a PNG file"""
    return encode_png(np.array(test_image.pixels))


@pytest.fixture
def image_manager():
    """Create ImageManager instance for testing"""
    manager = ImageManager(max_size_mb=100, max_images=10)
    yield manager
    manager.cleanup()


@pytest.fixture
def image_service(image_manager, tmp_path):
    """Create ImageService instance rooted at the test's temporary directory"""
    return ImageService(image_manager=image_manager, storage_dir=tmp_path)


@pytest.fixture
def enhancement_service(image_manager):
    """Create EnhancementService instance for testing"""
    return EnhancementService(image_manager=image_manager)
