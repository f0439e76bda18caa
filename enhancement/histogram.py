"""
Intensity histogram and the moment sums Otsu's search consumes.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.constants import PixelConstants
from core.image.converters import to_luma
from core.image.raster import RasterImage


@dataclass(frozen=True, eq=False)
class HistogramStats:
    """256-bin intensity histogram with its total and first moment."""

    counts: np.ndarray
    total: int
    weighted_sum: float

    @classmethod
    def from_counts(cls, counts) -> "HistogramStats":
        """Build stats from raw per-level counts (length 256)."""
        counts = np.asarray(counts, dtype=np.int64)
        if counts.shape != (PixelConstants.LEVELS,):
            raise ValueError(f"Histogram must have {PixelConstants.LEVELS} bins, got {counts.shape}")
        if (counts < 0).any():
            raise ValueError("Histogram counts must be non-negative")

        counts = counts.copy()
        counts.flags.writeable = False
        levels = np.arange(PixelConstants.LEVELS, dtype=np.float64)
        return cls(
            counts=counts,
            total=int(counts.sum()),
            weighted_sum=float(np.dot(levels, counts)),
        )

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    @property
    def mean(self) -> Optional[float]:
        """Mean intensity, or None for an empty histogram."""
        if self.is_empty:
            return None
        return self.weighted_sum / self.total

    def to_dict(self) -> dict:
        return {
            "counts": self.counts.tolist(),
            "total": self.total,
            "mean": self.mean,
        }


def build_histogram(image: RasterImage) -> HistogramStats:
    """
    Count pixel occurrences per intensity level in a single pass.

    Non-GRAY images are reduced to luma first.

    Args:
        image: Input image

    Returns:
        HistogramStats whose counts sum to the pixel count
    """
    return histogram_from_luma(to_luma(image))


def histogram_from_luma(luma: np.ndarray) -> HistogramStats:
    """Histogram of an (H, W) uint8 intensity plane."""
    counts = np.bincount(luma.ravel(), minlength=PixelConstants.LEVELS)
    return HistogramStats.from_counts(counts)
