"""
Image Enhancement Engine

Stateless transforms over immutable RasterImage values. Nothing here keeps
images between calls; the caller owns the original and the latest result.

Usage:
    from enhancement import apply_transform, stretch_contrast, otsu_threshold

    stretched = stretch_contrast(image)
    binary = apply_transform(image, "threshold", {"threshold": 100})
"""

import logging
from typing import Any, Dict, Optional, Union

from core.constants import ErrorMessages
from core.enums import TransformMethod
from core.image.raster import RasterImage
from core.utils.enum_converter import parse_enum
from core.utils.params_processor import prepare_params

from .color_model import hsv_to_rgb, hsv_to_rgb_array, rgb_to_hsv, rgb_to_hsv_array
from .contrast import stretch_contrast, value_range
from .histogram import HistogramStats, build_histogram, histogram_from_luma
from .otsu import OtsuResult, compute_otsu, find_otsu_threshold, otsu_threshold
from .point_transforms import (
    BrightnessParams,
    ThresholdParams,
    adjust_brightness,
    binarize,
    invert,
    manual_threshold,
)

logger = logging.getLogger(__name__)

# Parameter model per method; methods without parameters are absent
PARAMS_BY_METHOD = {
    TransformMethod.THRESHOLD: ThresholdParams,
    TransformMethod.BRIGHTNESS: BrightnessParams,
}


def apply_transform(
    image: RasterImage,
    method: Union[TransformMethod, str],
    params: Optional[Union[Dict[str, Any], ThresholdParams, BrightnessParams]] = None,
) -> RasterImage:
    """
    Run one enhancement transform by name.

    Args:
        image: Input image (never modified)
        method: Transform method (enum or its string value)
        params: Parameters for threshold/brightness (model or dict); ignored otherwise

    Returns:
        New image; GRAY for threshold methods, same format otherwise

    Raises:
        ValueError: If the method is unknown or params fail validation
    """
    resolved = parse_enum(method, TransformMethod, None, normalize=True)
    if resolved is None:
        raise ValueError(ErrorMessages.UNKNOWN_METHOD.format(method=method))

    if resolved == TransformMethod.CONTRAST:
        return stretch_contrast(image)
    if resolved == TransformMethod.OTSU:
        return otsu_threshold(image)
    if resolved == TransformMethod.INVERT:
        return invert(image)

    params_class = PARAMS_BY_METHOD[resolved]
    if isinstance(params, dict):
        params = params_class(**params)
    params = prepare_params(params, params_class)

    if resolved == TransformMethod.THRESHOLD:
        return manual_threshold(image, params.threshold)
    return adjust_brightness(image, params.delta)


__all__ = [
    # Color model
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_hsv_array",
    "hsv_to_rgb_array",
    # Point transforms
    "invert",
    "adjust_brightness",
    "manual_threshold",
    "binarize",
    "ThresholdParams",
    "BrightnessParams",
    # Histogram / Otsu
    "HistogramStats",
    "build_histogram",
    "histogram_from_luma",
    "OtsuResult",
    "find_otsu_threshold",
    "compute_otsu",
    "otsu_threshold",
    # Contrast
    "stretch_contrast",
    "value_range",
    # Dispatch
    "PARAMS_BY_METHOD",
    "apply_transform",
]
