"""
FastAPI dependencies for the Image Enhancement Flow API.

The session store lives in app.state (set up by the lifespan handler);
services are cheap wrappers around it and are built per request.
"""

import logging
from typing import Any, Dict

from fastapi import Depends, HTTPException, Path, Request

from core.constants import ImageConstants
from core.image_manager import ImageManager
from services.enhancement_service import EnhancementService
from services.image_service import ImageService

logger = logging.getLogger(__name__)


def get_image_manager(request: Request) -> ImageManager:
    """
    Session store from app state.

    Raises:
        HTTPException: 500 if the lifespan handler has not run
    """
    image_manager = getattr(request.app.state, "image_manager", None)
    if image_manager is None:
        logger.error("ImageManager missing from app state")
        raise HTTPException(status_code=500, detail="Internal server error: store not initialized")
    return image_manager


def image_id_param(image_id: str = Path(..., description="Image session identifier")) -> str:
    return image_id


def get_config(request: Request) -> Dict[str, Any]:
    """Settings snapshot stored at startup ({} when absent)"""
    config = getattr(request.app.state, "config", None)
    if config is None:
        logger.warning("No config in app state, reporting empty settings")
        return {}
    return config


def get_image_service(
    image_manager: ImageManager = Depends(get_image_manager),
    config: Dict[str, Any] = Depends(get_config),
) -> ImageService:
    image_config = config.get("image", {})
    return ImageService(
        image_manager=image_manager,
        storage_dir=image_config.get("storage_dir", ImageConstants.DEFAULT_STORAGE_DIR),
        default_save_format=image_config.get(
            "default_save_format", ImageConstants.DEFAULT_SAVE_FORMAT
        ),
    )


def get_enhancement_service(
    image_manager: ImageManager = Depends(get_image_manager),
) -> EnhancementService:
    return EnhancementService(image_manager=image_manager)
