"""
Enhance API Router - Enhancement transform endpoints

Every transform endpoint follows the same pattern:
1. Apply the transform to the session's original (service)
2. Store the output as the session's current result (service)
3. Return TransformResponse with output info and preview thumbnail
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_enhancement_service, image_id_param
from api.exceptions import safe_endpoint
from core.enums import TransformMethod
from schemas.base import BaseTransformParams
from schemas.common import ImageInfo
from schemas.enhance import (
    BrightnessRequest,
    ContrastRequest,
    HistogramResponse,
    InvertRequest,
    OtsuRequest,
    ThresholdRequest,
    TransformResponse,
)
from services.enhancement_service import EnhancementService

logger = logging.getLogger(__name__)

router = APIRouter()


def execute_transform(
    service: EnhancementService,
    image_id: str,
    method: TransformMethod,
    params: Optional[BaseTransformParams] = None,
) -> TransformResponse:
    """Run one transform through the service and build the response"""
    result = service.apply(image_id, method, params)
    return TransformResponse(
        image_id=image_id,
        method=result.method,
        info=ImageInfo.from_image(result.image),
        format_changed=result.format_changed,
        threshold=result.threshold,
        processing_time_ms=result.processing_time_ms,
        thumbnail_base64=result.thumbnail_base64,
    )


@router.post("/contrast")
@safe_endpoint
async def contrast(
    request: ContrastRequest, service=Depends(get_enhancement_service)
) -> TransformResponse:
    """
    Linear contrast stretch.

    Rescales HSV value so the darkest pixel maps to 0 and the brightest to
    full intensity, keeping hue and saturation. Flat images come back unchanged.
    """
    return execute_transform(service, request.image_id, TransformMethod.CONTRAST)


@router.post("/otsu")
@safe_endpoint
async def otsu(request: OtsuRequest, service=Depends(get_enhancement_service)) -> TransformResponse:
    """
    Automatic binarization with Otsu's threshold.

    The chosen threshold is returned in the response; output is grayscale.
    """
    return execute_transform(service, request.image_id, TransformMethod.OTSU)


@router.post("/threshold")
@safe_endpoint
async def threshold(
    request: ThresholdRequest, service=Depends(get_enhancement_service)
) -> TransformResponse:
    """Binarize at a fixed threshold (luma > threshold is white)"""
    return execute_transform(service, request.image_id, TransformMethod.THRESHOLD, request)


@router.post("/invert")
@safe_endpoint
async def invert(
    request: InvertRequest, service=Depends(get_enhancement_service)
) -> TransformResponse:
    """Photographic negative; alpha is kept"""
    return execute_transform(service, request.image_id, TransformMethod.INVERT)


@router.post("/brightness")
@safe_endpoint
async def brightness(
    request: BrightnessRequest, service=Depends(get_enhancement_service)
) -> TransformResponse:
    """Add a signed offset to every color channel, clamped to 0..255"""
    return execute_transform(service, request.image_id, TransformMethod.BRIGHTNESS, request)


@router.get("/{image_id}/histogram")
@safe_endpoint
async def histogram(
    image_id: str = Depends(image_id_param),
    processed: bool = Query(False, description="Use the current result instead of the original"),
    service=Depends(get_enhancement_service),
) -> HistogramResponse:
    """256-bin intensity histogram with the Otsu threshold it implies"""
    return HistogramResponse(**service.histogram(image_id, processed=processed))
