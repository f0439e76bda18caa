"""
Image API Router - Loading, exporting and resetting image sessions
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from api.dependencies import get_image_manager, get_image_service, image_id_param
from api.exceptions import ImageNotFoundException, InvalidParameterException, safe_endpoint
from core.constants import APIConstants
from core.enums import SaveFormat
from schemas import (
    ImageInfo,
    ImageListResponse,
    ImageLoadRequest,
    ImageLoadResponse,
    ImageMetadata,
    ImageResetResponse,
    ImageResultResponse,
    ImageSaveRequest,
    ImageSaveResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/load")
@safe_endpoint
async def load_image(
    request: ImageLoadRequest, image_service=Depends(get_image_service)
) -> ImageLoadResponse:
    """
    Load an image from base64 data or from a path on the server.

    The decoded image becomes the original of a new session; its id is
    used by every enhancement endpoint.
    """
    if request.path is not None:
        image_id, image, thumbnail = image_service.load_file(request.path)
    else:
        image_id, image, thumbnail = image_service.load_base64(request.image_base64)

    return ImageLoadResponse(
        image_id=image_id, info=ImageInfo.from_image(image), thumbnail_base64=thumbnail
    )


@router.post("/upload")
@safe_endpoint
async def upload_image(
    file: UploadFile = File(...), image_service=Depends(get_image_service)
) -> ImageLoadResponse:
    """Load an image from a multipart file upload"""
    data = await file.read()
    if len(data) > APIConstants.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
        raise InvalidParameterException("file", f"larger than {APIConstants.MAX_UPLOAD_SIZE_MB} MB")

    image_id, image, thumbnail = image_service.load_bytes(data, source=file.filename)

    logger.info(f"Uploaded {file.filename} as {image_id} ({len(data)} bytes)")

    return ImageLoadResponse(
        image_id=image_id, info=ImageInfo.from_image(image), thumbnail_base64=thumbnail
    )


@router.get("/list")
@safe_endpoint
async def list_images(image_manager=Depends(get_image_manager)) -> ImageListResponse:
    """List all stored image sessions"""
    images = [ImageMetadata(**meta) for meta in image_manager.list_images()]
    return ImageListResponse(images=images, count=len(images))


@router.get("/{image_id}")
@safe_endpoint
async def get_image_metadata(
    image_id: str = Depends(image_id_param), image_manager=Depends(get_image_manager)
) -> ImageMetadata:
    """Describe one image session"""
    metadata = image_manager.get_metadata(image_id)
    if metadata is None:
        raise ImageNotFoundException(image_id)
    return ImageMetadata(**metadata)


@router.get("/{image_id}/result")
@safe_endpoint
async def get_result(
    image_id: str = Depends(image_id_param),
    format: SaveFormat = Query(SaveFormat.PNG, description="Encoding of the returned image"),
    max_dimension: Optional[int] = Query(
        None, ge=1, description="Downscale so neither side exceeds this many pixels"
    ),
    image_service=Depends(get_image_service),
) -> ImageResultResponse:
    """Current result of a session (the original if nothing was applied yet)"""
    image, image_base64 = image_service.encode_result(image_id, format, max_dimension)
    return ImageResultResponse(
        image_id=image_id,
        format=format,
        info=ImageInfo.from_image(image),
        image_base64=image_base64,
    )


@router.post("/{image_id}/reset")
@safe_endpoint
async def reset_image(
    image_id: str = Depends(image_id_param), image_service=Depends(get_image_service)
) -> ImageResetResponse:
    """Discard the latest result and go back to the original"""
    original, thumbnail = image_service.reset(image_id)
    return ImageResetResponse(
        image_id=image_id, info=ImageInfo.from_image(original), thumbnail_base64=thumbnail
    )


@router.post("/{image_id}/save")
@safe_endpoint
async def save_image(
    request: ImageSaveRequest,
    image_id: str = Depends(image_id_param),
    image_service=Depends(get_image_service),
) -> ImageSaveResponse:
    """Write the current result to a file on the server"""
    saved_path, image = image_service.save(image_id, request.path, request.format)
    return ImageSaveResponse(
        image_id=image_id, saved_path=str(saved_path), info=ImageInfo.from_image(image)
    )


@router.delete("/{image_id}")
@safe_endpoint
async def delete_image(
    image_id: str = Depends(image_id_param), image_service=Depends(get_image_service)
) -> dict:
    """Remove an image session"""
    image_service.delete(image_id)
    return {"success": True, "image_id": image_id}
