"""
Tests for invert, brightness and manual threshold
"""

import numpy as np
import pytest
from pydantic import ValidationError

from core.enums import PixelFormat
from core.image.raster import RasterImage
from enhancement.point_transforms import (
    BrightnessParams,
    ThresholdParams,
    adjust_brightness,
    binarize,
    invert,
    manual_threshold,
)


class TestInvert:
    """Tests for the photographic negative"""

    def test_invert_values(self):
        image = RasterImage.from_array(np.array([[0, 100, 255]], dtype=np.uint8))
        result = invert(image)
        assert result.pixel_format == PixelFormat.GRAY
        np.testing.assert_array_equal(result.pixels, [[255, 155, 0]])

    def test_invert_twice_is_identity(self, test_image, rgba_image, gray_gradient):
        for image in (test_image, rgba_image, gray_gradient):
            assert invert(invert(image)) == image

    def test_alpha_untouched(self, rgba_image):
        result = invert(rgba_image)
        assert result.pixel_format == PixelFormat.RGBA
        np.testing.assert_array_equal(result.alpha(), rgba_image.alpha())
        np.testing.assert_array_equal(result.rgb(), 255 - rgba_image.rgb())

    def test_input_not_modified(self, test_image):
        before = np.array(test_image.pixels)
        invert(test_image)
        np.testing.assert_array_equal(test_image.pixels, before)

    def test_empty_image(self, empty_rgb):
        result = invert(empty_rgb)
        assert result.is_empty
        assert result.pixel_format == PixelFormat.RGB


class TestBrightness:
    """Tests for the saturating brightness shift"""

    @pytest.fixture
    def mid_gray(self):
        return RasterImage.from_array(np.full((4, 4, 3), 100, dtype=np.uint8))

    def test_positive_shift(self, mid_gray):
        result = adjust_brightness(mid_gray, 50)
        assert np.all(result.pixels == 150)

    def test_saturates_high(self, mid_gray):
        assert np.all(adjust_brightness(mid_gray, 200).pixels == 255)

    def test_saturates_low(self, mid_gray):
        assert np.all(adjust_brightness(mid_gray, -255).pixels == 0)

    def test_zero_delta_is_identity(self, test_image):
        result = adjust_brightness(test_image, 0)
        assert result == test_image
        assert result is not test_image

    def test_extreme_delta_accepted(self, mid_gray):
        assert np.all(adjust_brightness(mid_gray, 10_000).pixels == 255)
        assert np.all(adjust_brightness(mid_gray, -10_000).pixels == 0)

    def test_keeps_alpha(self, rgba_image):
        result = adjust_brightness(rgba_image, 30)
        assert result.pixel_format == PixelFormat.RGBA
        np.testing.assert_array_equal(result.alpha(), rgba_image.alpha())

    def test_gray_stays_gray(self, gray_gradient):
        result = adjust_brightness(gray_gradient, -50)
        assert result.pixel_format == PixelFormat.GRAY
        assert int(result.pixels.min()) == 0
        assert int(result.pixels.max()) == 150


class TestManualThreshold:
    """Tests for fixed-level binarization"""

    def test_strictly_greater_is_white(self):
        image = RasterImage.from_array(np.array([[0, 128], [129, 255]], dtype=np.uint8))
        result = manual_threshold(image, 128)
        np.testing.assert_array_equal(result.pixels, [[0, 0], [255, 255]])

    def test_output_is_gray_and_binary(self, test_image):
        result = manual_threshold(test_image, 100)
        assert result.pixel_format == PixelFormat.GRAY
        assert (result.width, result.height) == (test_image.width, test_image.height)
        assert set(np.unique(result.pixels)) <= {0, 255}

    def test_threshold_255_gives_black(self, test_image):
        assert not manual_threshold(test_image, 255).pixels.any()

    def test_gray_rgb_pixels_use_their_level(self):
        pixels = np.array([[[90, 90, 90], [91, 91, 91]]], dtype=np.uint8)
        result = manual_threshold(RasterImage.from_array(pixels), 90)
        np.testing.assert_array_equal(result.pixels, [[0, 255]])

    def test_color_pixels_use_rec709_luma(self):
        # luma: green 182, red 54, blue 18
        pixels = np.array([[[0, 255, 0], [255, 0, 0], [0, 0, 255]]], dtype=np.uint8)
        image = RasterImage.from_array(pixels)
        np.testing.assert_array_equal(manual_threshold(image, 160).pixels, [[255, 0, 0]])
        np.testing.assert_array_equal(manual_threshold(image, 181).pixels, [[255, 0, 0]])
        np.testing.assert_array_equal(manual_threshold(image, 182).pixels, [[0, 0, 0]])
        np.testing.assert_array_equal(manual_threshold(image, 53).pixels, [[255, 255, 0]])
        np.testing.assert_array_equal(manual_threshold(image, 17).pixels, [[255, 255, 255]])

    def test_rgba_input(self, rgba_image):
        assert manual_threshold(rgba_image, 128).pixel_format == PixelFormat.GRAY

    def test_binarize_empty(self):
        result = binarize(np.zeros((0, 0), dtype=np.uint8), 10)
        assert result.is_empty
        assert result.pixel_format == PixelFormat.GRAY


class TestParams:
    """Slider range validation"""

    def test_defaults(self):
        assert ThresholdParams().threshold == 128
        assert BrightnessParams().delta == 0

    @pytest.mark.parametrize("value", [-1, 256])
    def test_threshold_out_of_range(self, value):
        with pytest.raises(ValidationError):
            ThresholdParams(threshold=value)

    @pytest.mark.parametrize("value", [-256, 256])
    def test_brightness_out_of_range(self, value):
        with pytest.raises(ValidationError):
            BrightnessParams(delta=value)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ThresholdParams(treshold=10)
