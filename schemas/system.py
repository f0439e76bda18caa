"""
System status API models.
"""

from typing import Any, Dict

from pydantic import BaseModel


class SystemStatus(BaseModel):
    """System status information"""

    status: str
    uptime: float
    memory_usage: Dict[str, float]
    image_store: Dict[str, Any]


class DebugSettings(BaseModel):
    """Debug settings"""

    enabled: bool
    verbose_logging: bool
