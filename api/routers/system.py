"""
System API Router - Status and runtime settings
"""

import logging
import time
from datetime import datetime

import psutil
from fastapi import APIRouter, Depends

from api.dependencies import get_config, get_image_manager
from api.exceptions import safe_endpoint
from schemas.system import DebugSettings, SystemStatus

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/status")
@safe_endpoint
async def get_status(image_manager=Depends(get_image_manager)) -> SystemStatus:
    """Get system status"""
    process = psutil.Process()
    memory_info = process.memory_info()
    virtual_memory = psutil.virtual_memory()

    return SystemStatus(
        status="healthy",
        uptime=time.time() - START_TIME,
        memory_usage={
            "process_mb": memory_info.rss / 1024 / 1024,
            "system_percent": virtual_memory.percent,
            "available_mb": virtual_memory.available / 1024 / 1024,
        },
        image_store=image_manager.get_stats(),
    )


@router.post("/debug/{enable}")
@safe_endpoint
async def set_debug_mode(enable: bool) -> DebugSettings:
    """Enable or disable debug logging"""
    logging.getLogger().setLevel(logging.DEBUG if enable else logging.INFO)
    logger.info(f"Debug mode {'enabled' if enable else 'disabled'}")
    return DebugSettings(enabled=enable, verbose_logging=enable)


@router.get("/config")
@safe_endpoint
async def get_configuration(config=Depends(get_config)) -> dict:
    """Get current configuration"""
    return config


@router.get("/health")
async def health_check() -> dict:
    """Simple health check"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
