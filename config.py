"""
Application configuration for Image Enhancement Flow.

Values come from environment variables prefixed with ENHANCE_ (nested
sections use a double underscore, e.g. ENHANCE_IMAGE__MAX_IMAGES=50) or
from a local .env file.
"""

from functools import lru_cache
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import APIConstants, ImageConstants, SystemConstants
from core.enums import SaveFormat


class ImageConfig(BaseModel):
    """Image session store settings"""

    max_images: int = Field(
        default=ImageConstants.DEFAULT_MAX_IMAGES,
        ge=ImageConstants.MIN_IMAGES,
        le=ImageConstants.MAX_IMAGES,
    )
    max_memory_mb: int = Field(default=ImageConstants.DEFAULT_MAX_MEMORY_MB, ge=1)
    thumbnail_width: int = Field(
        default=ImageConstants.DEFAULT_THUMBNAIL_WIDTH,
        ge=ImageConstants.MIN_THUMBNAIL_WIDTH,
        le=ImageConstants.MAX_THUMBNAIL_WIDTH,
    )
    default_save_format: SaveFormat = SaveFormat(ImageConstants.DEFAULT_SAVE_FORMAT)
    storage_dir: str = ImageConstants.DEFAULT_STORAGE_DIR

    @field_validator("default_save_format", mode="before")
    @classmethod
    def normalize_save_format(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class APIConfig(BaseModel):
    """HTTP server settings"""

    host: str = APIConstants.DEFAULT_HOST
    port: int = Field(default=APIConstants.DEFAULT_PORT, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class SystemConfig(BaseModel):
    """Logging and debug settings"""

    log_level: str = SystemConstants.LOG_LEVEL_DEFAULT
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseSettings):
    """Root settings object"""

    model_config = SettingsConfigDict(
        env_prefix="ENHANCE_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    image: ImageConfig = Field(default_factory=ImageConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process"""
    return Settings()
