"""
Otsu's automatic threshold.

Finds the intensity level that maximizes the between-class variance of the
histogram, then binarizes with the same rule as the manual threshold.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from core.constants import EnhancementDefaults, PixelConstants
from core.image.converters import to_luma
from core.image.raster import RasterImage
from enhancement.histogram import histogram_from_luma
from enhancement.point_transforms import binarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OtsuResult:
    """Outcome of an Otsu run on one image."""

    image: RasterImage
    threshold: Optional[int]  # None when the input had no pixels
    max_variance: float


def find_otsu_threshold(
    counts: Union[Sequence[int], np.ndarray], total: int
) -> Optional[int]:
    """
    Search t in [0, 255] for the maximum between-class variance.

    Splits with no background pixels are skipped; the search stops once no
    foreground pixels remain. Only a strictly greater variance replaces the
    current best, so the first maximizing t wins. A histogram where no split
    has positive variance (a single populated level) yields 0.

    Args:
        counts: 256 per-level pixel counts
        total: Sum of counts

    Returns:
        Optimal threshold, or None when total is 0
    """
    threshold, _ = _search(counts, total)
    return threshold


def _search(counts, total: int):
    if total == 0:
        return None, 0.0

    hist = [float(c) for c in counts]
    total = float(total)
    weighted_total = sum(level * count for level, count in enumerate(hist))

    sum_b = 0.0
    w_b = 0.0
    max_variance = 0.0
    optimal_threshold = EnhancementDefaults.OTSU_FALLBACK_THRESHOLD

    for t in range(PixelConstants.LEVELS):
        w_b += hist[t]
        if w_b == 0:
            continue

        w_f = total - w_b
        if w_f == 0:
            break

        sum_b += t * hist[t]

        mean_b = sum_b / w_b
        mean_f = (weighted_total - sum_b) / w_f

        variance = w_b * w_f * (mean_b - mean_f) ** 2

        if variance > max_variance:
            max_variance = variance
            optimal_threshold = t

    return optimal_threshold, max_variance


def compute_otsu(image: RasterImage) -> OtsuResult:
    """
    Threshold an image at its Otsu level and report the level used.

    An image with no pixels is returned unchanged (as a copy, original format).
    """
    luma = to_luma(image)
    stats = histogram_from_luma(luma)

    if stats.is_empty:
        logger.debug("Otsu skipped: image has no pixels")
        return OtsuResult(image=image.copy(), threshold=None, max_variance=0.0)

    threshold, max_variance = _search(stats.counts, stats.total)
    logger.debug(f"Otsu threshold {threshold} (variance {max_variance:.3f})")

    return OtsuResult(
        image=binarize(luma, threshold), threshold=threshold, max_variance=max_variance
    )


def otsu_threshold(image: RasterImage) -> RasterImage:
    """Binarize an image at the threshold chosen by Otsu's method."""
    return compute_otsu(image).image
