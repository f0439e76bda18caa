"""
Enhancement Service - Business logic for applying transforms to image sessions.

Every transform reads the session's *original* image, so transforms never
stack; the output replaces the session's latest result.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from api.exceptions import ImageNotFoundException, InvalidParameterException
from core.enums import TransformMethod
from core.image.raster import RasterImage
from core.image_manager import ImageManager
from core.utils.decorators import timer
from core.utils.enum_converter import parse_enum
from core.utils.params_processor import params_to_dict, prepare_params
from enhancement import PARAMS_BY_METHOD, apply_transform, build_histogram, compute_otsu
from enhancement.otsu import find_otsu_threshold
from schemas.base import BaseTransformParams

logger = logging.getLogger(__name__)


@dataclass
class TransformResult:
    """Outcome of one transform on a session"""

    image_id: str
    method: TransformMethod
    image: RasterImage
    format_changed: bool
    threshold: Optional[int]
    processing_time_ms: float
    thumbnail_base64: Optional[str]


class EnhancementService:
    """
    Service for enhancement operations.

    Combines the stateless enhancement engine with the session store:
    fetch original, transform, store as latest result, build preview.
    """

    def __init__(self, image_manager: ImageManager):
        """
        Initialize enhancement service.

        Args:
            image_manager: Image manager instance
        """
        self.image_manager = image_manager

    def _get_original(self, image_id: str) -> RasterImage:
        image = self.image_manager.get(image_id)
        if image is None:
            raise ImageNotFoundException(image_id)
        return image

    @staticmethod
    def _resolve_method(method: Union[TransformMethod, str]) -> TransformMethod:
        resolved = parse_enum(method, TransformMethod, None, normalize=True)
        if resolved is None:
            raise InvalidParameterException("method", method)
        return resolved

    def apply(
        self,
        image_id: str,
        method: Union[TransformMethod, str],
        params: Optional[Union[BaseTransformParams, Dict[str, Any]]] = None,
    ) -> TransformResult:
        """
        Apply one transform to a session's original image.

        Args:
            image_id: Image identifier
            method: Transform to run
            params: Threshold/brightness parameters (model or dict); ignored
                for parameterless methods

        Returns:
            TransformResult describing the new latest result

        Raises:
            ImageNotFoundException: If image not found
            InvalidParameterException: If method is unknown
        """
        resolved = self._resolve_method(method)
        original = self._get_original(image_id)

        params_class = PARAMS_BY_METHOD.get(resolved)
        if params_class is not None:
            if isinstance(params, dict):
                params = params_class(**params)
            elif params is not None and type(params) is not params_class:
                # Request models extend the params model with extra fields
                params = params_class(**params.model_dump(include=set(params_class.model_fields)))
            params = prepare_params(params, params_class)
        else:
            params = None

        threshold = None
        with timer() as t:
            if resolved == TransformMethod.OTSU:
                otsu = compute_otsu(original)
                output = otsu.image
                threshold = otsu.threshold
            else:
                output = apply_transform(original, resolved, params)
                if resolved == TransformMethod.THRESHOLD:
                    threshold = params.threshold

        processing_time_ms = t["ms"]

        self.image_manager.set_processed(image_id, output, resolved, params_to_dict(params))
        thumbnail_base64 = self.image_manager.create_thumbnail(output)

        logger.info(
            f"Applied {resolved.value} to {image_id}: {original!r} -> {output!r} "
            f"in {processing_time_ms:.1f}ms"
        )

        return TransformResult(
            image_id=image_id,
            method=resolved,
            image=output,
            format_changed=output.pixel_format != original.pixel_format,
            threshold=threshold,
            processing_time_ms=processing_time_ms,
            thumbnail_base64=thumbnail_base64,
        )

    def histogram(self, image_id: str, processed: bool = False) -> Dict[str, Any]:
        """
        Intensity histogram of a session image with its Otsu threshold.

        Args:
            image_id: Image identifier
            processed: Use the latest result instead of the original

        Returns:
            Dict with counts, total, mean and otsu_threshold

        Raises:
            ImageNotFoundException: If image not found
        """
        if processed:
            image = self.image_manager.get_processed(image_id)
            if image is None:
                raise ImageNotFoundException(image_id)
        else:
            image = self._get_original(image_id)

        stats = build_histogram(image)
        data = stats.to_dict()
        data["otsu_threshold"] = find_otsu_threshold(stats.counts, stats.total)
        data["source"] = "processed" if processed else "original"
        data["image_id"] = image_id
        return data
