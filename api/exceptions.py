"""
Exception types and handlers for the Image Enhancement Flow API.

Services raise the typed exceptions below; routers wrap endpoints with
`safe_endpoint` and `register_exception_handlers` turns everything into a
JSON error body.
"""

import functools
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.constants import ErrorMessages

logger = logging.getLogger(__name__)


class EnhanceFlowException(Exception):
    """Base exception carrying an HTTP status code"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ImageNotFoundException(EnhanceFlowException):
    """Requested image session does not exist"""

    status_code = 404

    def __init__(self, image_id: str):
        super().__init__(
            ErrorMessages.IMAGE_NOT_FOUND.format(image_id=image_id), {"image_id": image_id}
        )


class ImageDecodeException(EnhanceFlowException):
    """Uploaded data could not be decoded into an image"""

    status_code = 400

    def __init__(self, error: Any):
        super().__init__(ErrorMessages.IMAGE_DECODE_FAILED.format(error=error))


class ImageSaveException(EnhanceFlowException):
    """Result could not be written to disk"""

    status_code = 500

    def __init__(self, path: Any, error: Any):
        super().__init__(
            ErrorMessages.IMAGE_SAVE_FAILED.format(path=path, error=error), {"path": str(path)}
        )


class InvalidParameterException(EnhanceFlowException):
    """Parameter outside of its documented domain"""

    status_code = 400

    def __init__(self, param: str, value: Any):
        super().__init__(
            ErrorMessages.INVALID_PARAMETER.format(param=param, value=value), {"param": param}
        )


def _error_body(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    content = {"error": message, "detail": message}
    if details:
        content["details"] = details
    return content


def safe_endpoint(func):
    """
    Decorator for async endpoints.

    HTTP and application exceptions pass through untouched; ValueError
    becomes a 400; anything else is logged and becomes a 500.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, EnhanceFlowException):
            raise
        except ValueError as e:
            logger.warning(f"{func.__name__}: invalid input: {e}")
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            logger.error(f"{func.__name__} failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Internal server error: {e}")

    return wrapper


def register_exception_handlers(app: FastAPI):
    """Attach JSON handlers for application exceptions"""

    @app.exception_handler(EnhanceFlowException)
    async def enhance_flow_exception_handler(request: Request, exc: EnhanceFlowException):
        if exc.status_code >= 500:
            logger.error(f"{request.url.path}: {exc.message}")
        else:
            logger.info(f"{request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code, content=_error_body(exc.message, exc.details)
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.info(f"{request.url.path}: {exc}")
        return JSONResponse(status_code=400, content=_error_body(str(exc)))
