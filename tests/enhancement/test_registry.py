"""
Tests for apply_transform dispatch
"""

import pytest

from core.enums import PixelFormat, TransformMethod
from enhancement import (
    adjust_brightness,
    apply_transform,
    invert,
    manual_threshold,
    otsu_threshold,
    stretch_contrast,
)
from enhancement.point_transforms import ThresholdParams


class TestApplyTransform:
    """Dispatch by method name"""

    def test_matches_direct_calls(self, test_image):
        assert apply_transform(test_image, "invert") == invert(test_image)
        assert apply_transform(test_image, "contrast") == stretch_contrast(test_image)
        assert apply_transform(test_image, TransformMethod.OTSU) == otsu_threshold(test_image)

    def test_params_dict(self, test_image):
        result = apply_transform(test_image, "brightness", {"delta": 25})
        assert result == adjust_brightness(test_image, 25)

    def test_params_model(self, test_image):
        result = apply_transform(test_image, "threshold", ThresholdParams(threshold=90))
        assert result == manual_threshold(test_image, 90)

    def test_default_params(self, test_image):
        assert apply_transform(test_image, "threshold") == manual_threshold(test_image, 128)
        assert apply_transform(test_image, "brightness") == test_image

    def test_case_insensitive(self, test_image):
        assert apply_transform(test_image, " INVERT ").pixel_format == PixelFormat.RGB

    def test_unknown_method(self, test_image):
        with pytest.raises(ValueError):
            apply_transform(test_image, "blur")

    def test_invalid_params(self, test_image):
        with pytest.raises(ValueError):
            apply_transform(test_image, "brightness", {"delta": 999})
