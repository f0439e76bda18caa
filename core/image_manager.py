"""
Image Manager - In-memory session store for loaded images.

Each session keeps the original image and the most recent transform result,
which is all the state "reset to original" needs. Sessions are evicted in
least-recently-used order when the count or memory limit is exceeded.
"""

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import Any, Dict, List, Optional

from core.constants import ImageConstants
from core.enums import TransformMethod
from core.image.processors import create_thumbnail
from core.image.raster import RasterImage

logger = logging.getLogger(__name__)


@dataclass
class ImageRecord:
    """Single image session"""

    id: str
    original: RasterImage
    processed: RasterImage
    source: Optional[str]
    created_at: datetime
    last_access: datetime
    last_method: Optional[TransformMethod] = None
    transform_count: int = 0
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def nbytes(self) -> int:
        if self.processed is self.original:
            return self.original.nbytes
        return self.original.nbytes + self.processed.nbytes


class ImageManager:
    """Session store holding original and latest result per image"""

    def __init__(
        self,
        max_size_mb: int = ImageConstants.DEFAULT_MAX_MEMORY_MB,
        max_images: int = ImageConstants.DEFAULT_MAX_IMAGES,
        thumbnail_width: int = ImageConstants.DEFAULT_THUMBNAIL_WIDTH,
    ):
        """
        Initialize Image Manager

        Args:
            max_size_mb: Memory budget for all sessions in megabytes
            max_images: Maximum number of sessions kept at once
            thumbnail_width: Width of generated preview thumbnails
        """
        self.max_size_bytes = max_size_mb * 1024 * 1024
        self.max_images = max_images
        self.thumbnail_width = thumbnail_width

        self.images: "OrderedDict[str, ImageRecord]" = OrderedDict()
        self.evicted_count = 0

        # Thread safety (RLock allows reentrant locking)
        self.lock = RLock()

        logger.info(
            f"Image Manager initialized: max_images={max_images}, max_size_mb={max_size_mb}"
        )

    def store(self, image: RasterImage, source: Optional[str] = None) -> str:
        """
        Store a freshly loaded image as a new session.

        The result starts out identical to the original.

        Args:
            image: Decoded image
            source: Optional provenance (file path, upload name)

        Returns:
            Image ID
        """
        with self.lock:
            image_id = f"img_{uuid.uuid4().hex[:12]}"
            now = datetime.now()

            self.images[image_id] = ImageRecord(
                id=image_id,
                original=image,
                processed=image,
                source=source,
                created_at=now,
                last_access=now,
            )
            self._evict_if_needed()

            logger.debug(f"Stored image {image_id}: {image!r}")
            return image_id

    def _touch(self, image_id: str) -> Optional[ImageRecord]:
        record = self.images.get(image_id)
        if record is not None:
            record.last_access = datetime.now()
            self.images.move_to_end(image_id)
        return record

    def get(self, image_id: str) -> Optional[RasterImage]:
        """Get the original image of a session, or None if unknown"""
        with self.lock:
            record = self._touch(image_id)
            return record.original if record else None

    def get_processed(self, image_id: str) -> Optional[RasterImage]:
        """Get the latest result of a session, or None if unknown"""
        with self.lock:
            record = self._touch(image_id)
            return record.processed if record else None

    def set_processed(
        self,
        image_id: str,
        image: RasterImage,
        method: Optional[TransformMethod] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Replace the latest result of a session.

        Returns:
            False if the session does not exist
        """
        with self.lock:
            record = self._touch(image_id)
            if record is None:
                return False

            record.processed = image
            record.last_method = method
            record.params = params or {}
            record.transform_count += 1
            self._evict_if_needed()
            return True

    def reset(self, image_id: str) -> Optional[RasterImage]:
        """
        Drop the latest result and go back to the original.

        Returns:
            The original image, or None if the session does not exist
        """
        with self.lock:
            record = self._touch(image_id)
            if record is None:
                return None

            record.processed = record.original
            record.last_method = None
            record.params = {}
            logger.debug(f"Reset image {image_id} to original")
            return record.original

    def has_image(self, image_id: str) -> bool:
        with self.lock:
            return image_id in self.images

    def delete(self, image_id: str) -> bool:
        """Remove a session; returns False if it did not exist"""
        with self.lock:
            record = self.images.pop(image_id, None)
            if record is None:
                return False
            logger.debug(f"Deleted image {image_id}")
            return True

    def get_metadata(self, image_id: str) -> Optional[Dict[str, Any]]:
        """Describe a session without touching its LRU position"""
        with self.lock:
            record = self.images.get(image_id)
            if record is None:
                return None
            return self._metadata(record)

    @staticmethod
    def _metadata(record: ImageRecord) -> Dict[str, Any]:
        return {
            "image_id": record.id,
            "source": record.source,
            "original": record.original.describe(),
            "processed": record.processed.describe(),
            "last_method": record.last_method.value if record.last_method else None,
            "params": dict(record.params),
            "transform_count": record.transform_count,
            "is_modified": record.processed is not record.original,
            "created_at": record.created_at,
            "last_access": record.last_access,
            "size_bytes": record.nbytes,
        }

    def list_images(self) -> List[Dict[str, Any]]:
        """Metadata of all sessions, most recently used last"""
        with self.lock:
            return [self._metadata(record) for record in self.images.values()]

    def create_thumbnail(
        self, image: RasterImage, width: Optional[int] = None
    ) -> Optional[str]:
        """Base64 preview thumbnail at the configured width (None for zero-area images)"""
        return create_thumbnail(image, width or self.thumbnail_width)

    def memory_usage(self) -> int:
        with self.lock:
            return sum(record.nbytes for record in self.images.values())

    def get_stats(self) -> Dict[str, Any]:
        """Store usage statistics"""
        with self.lock:
            used = self.memory_usage()
            return {
                "image_count": len(self.images),
                "max_images": self.max_images,
                "memory_used_mb": round(used / 1024 / 1024, 3),
                "memory_limit_mb": round(self.max_size_bytes / 1024 / 1024, 3),
                "memory_percent": round(100.0 * used / self.max_size_bytes, 2)
                if self.max_size_bytes
                else 0.0,
                "evicted_count": self.evicted_count,
            }

    def _evict_if_needed(self):
        """Evict least recently used sessions until both limits hold (never the newest one)"""
        while len(self.images) > 1 and (
            len(self.images) > self.max_images or self.memory_usage() > self.max_size_bytes
        ):
            oldest_id, _ = self.images.popitem(last=False)
            self.evicted_count += 1
            logger.info(f"Evicted image {oldest_id} (LRU)")

    def cleanup(self):
        """Release all sessions"""
        with self.lock:
            count = len(self.images)
            self.images.clear()
            logger.info(f"Image Manager cleaned up ({count} images released)")
