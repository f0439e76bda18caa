"""
Image Service - Business logic for loading, exporting and resetting images.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from api.exceptions import (
    ImageDecodeException,
    ImageNotFoundException,
    ImageSaveException,
    InvalidParameterException,
)
from core.constants import ImageConstants, SuccessMessages
from core.enums import SaveFormat
from core.image.converters import decode_image_bytes, encode_image, from_base64, to_base64
from core.image.processors import resize_image
from core.image.raster import RasterImage
from core.image_manager import ImageManager
from core.utils.enum_converter import parse_enum

logger = logging.getLogger(__name__)

# File extension -> encoding
EXTENSION_FORMATS = {
    ".png": SaveFormat.PNG,
    ".jpg": SaveFormat.JPEG,
    ".jpeg": SaveFormat.JPEG,
    ".bmp": SaveFormat.BMP,
    ".tif": SaveFormat.TIFF,
    ".tiff": SaveFormat.TIFF,
}

FORMAT_EXTENSIONS = {
    SaveFormat.PNG: ".png",
    SaveFormat.JPEG: ".jpg",
    SaveFormat.BMP: ".bmp",
    SaveFormat.TIFF: ".tiff",
}


def resolve_save_target(
    path: Union[str, Path],
    format: Optional[Union[SaveFormat, str]] = None,
    default_format: Union[SaveFormat, str] = ImageConstants.DEFAULT_SAVE_FORMAT,
) -> Tuple[Path, SaveFormat]:
    """
    Work out the final file path and encoding for a save request.

    A path without extension gets the extension of the requested format,
    or of `default_format` when no format is given. Otherwise the format
    follows the extension unless passed explicitly.

    Raises:
        InvalidParameterException: If the format or extension is unsupported
    """
    target = Path(path)
    requested = None
    if format is not None:
        requested = parse_enum(format, SaveFormat, None, normalize=True)
        if requested is None:
            raise InvalidParameterException("format", format)

    if not target.suffix:
        save_format = requested or parse_enum(default_format, SaveFormat, None, normalize=True)
        if save_format is None:
            raise InvalidParameterException("default_save_format", default_format)
        return target.with_name(target.name + FORMAT_EXTENSIONS[save_format]), save_format

    if requested is not None:
        return target, requested

    save_format = EXTENSION_FORMATS.get(target.suffix.lower())
    if save_format is None:
        raise InvalidParameterException("extension", target.suffix)
    return target, save_format


class ImageService:
    """Service for image session operations"""

    def __init__(
        self,
        image_manager: ImageManager,
        storage_dir: Union[str, Path] = ImageConstants.DEFAULT_STORAGE_DIR,
        default_save_format: Union[SaveFormat, str] = ImageConstants.DEFAULT_SAVE_FORMAT,
    ):
        """
        Initialize image service.

        Args:
            image_manager: Image manager instance
            storage_dir: Directory that server-side load and save paths must stay in
            default_save_format: Encoding for save paths given without extension
        """
        self.image_manager = image_manager
        self.storage_dir = Path(storage_dir).resolve()
        self.default_save_format = default_save_format

    def resolve_storage_path(self, path: Union[str, Path]) -> Path:
        """
        Resolve a client path against the storage directory.

        Relative paths are taken from the storage directory; absolute paths
        are accepted only when they point inside it.

        Raises:
            InvalidParameterException: If the path escapes the storage directory
        """
        resolved = (self.storage_dir / path).resolve()
        if resolved != self.storage_dir and self.storage_dir not in resolved.parents:
            logger.warning(f"Rejected path outside {self.storage_dir}: {path}")
            raise InvalidParameterException("path", f"{path} (outside the storage directory)")
        return resolved

    def _store(self, image: RasterImage, source: Optional[str]) -> Tuple[str, RasterImage, Optional[str]]:
        image_id = self.image_manager.store(image, source)
        thumbnail_base64 = self.image_manager.create_thumbnail(image)
        logger.info(SuccessMessages.IMAGE_LOADED.format(image_id=image_id) + f" {image!r}")
        return image_id, image, thumbnail_base64

    def load_bytes(
        self, data: bytes, source: Optional[str] = None
    ) -> Tuple[str, RasterImage, Optional[str]]:
        """
        Decode an encoded image file and open a new session for it.

        Returns:
            Tuple of (image_id, image, thumbnail_base64)

        Raises:
            ImageDecodeException: If the data is not a supported image
        """
        try:
            image = decode_image_bytes(data)
        except ValueError as e:
            raise ImageDecodeException(e)
        return self._store(image, source)

    def load_base64(
        self, image_base64: str, source: Optional[str] = None
    ) -> Tuple[str, RasterImage, Optional[str]]:
        """Like load_bytes, for base64 or data-URL input"""
        try:
            image = from_base64(image_base64)
        except ValueError as e:
            raise ImageDecodeException(e)
        return self._store(image, source or "base64")

    def load_file(self, path: Union[str, Path]) -> Tuple[str, RasterImage, Optional[str]]:
        """
        Read an image file from the storage directory.

        Raises:
            InvalidParameterException: If the path escapes the storage directory
            ImageDecodeException: If the file cannot be read or decoded
        """
        file_path = self.resolve_storage_path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise ImageDecodeException(e)
        return self.load_bytes(data, source=str(file_path))

    def get_image(self, image_id: str) -> RasterImage:
        """Original image of a session"""
        image = self.image_manager.get(image_id)
        if image is None:
            raise ImageNotFoundException(image_id)
        return image

    def get_processed(self, image_id: str) -> RasterImage:
        """Latest result of a session (the original before any transform)"""
        image = self.image_manager.get_processed(image_id)
        if image is None:
            raise ImageNotFoundException(image_id)
        return image

    def reset(self, image_id: str) -> Tuple[RasterImage, Optional[str]]:
        """
        Discard the latest result.

        Returns:
            Tuple of (original image, thumbnail_base64)
        """
        original = self.image_manager.reset(image_id)
        if original is None:
            raise ImageNotFoundException(image_id)
        thumbnail_base64 = self.image_manager.create_thumbnail(original)
        logger.info(SuccessMessages.IMAGE_RESET.format(image_id=image_id))
        return original, thumbnail_base64

    def encode_result(
        self,
        image_id: str,
        format: Union[SaveFormat, str] = SaveFormat.PNG,
        max_dimension: Optional[int] = None,
    ) -> Tuple[RasterImage, str]:
        """
        Encode the latest result as base64.

        Args:
            image_id: Image identifier
            format: Encoding of the returned file
            max_dimension: Downscale so neither side exceeds this (preview)

        Returns:
            Tuple of (encoded image, base64 data)
        """
        save_format = parse_enum(format, SaveFormat, None, normalize=True)
        if save_format is None:
            raise InvalidParameterException("format", format)

        image = self.get_processed(image_id)
        if max_dimension:
            image = resize_image(image, max_dimension=max_dimension)
        if image.is_empty:
            raise InvalidParameterException("image", "zero-area image cannot be encoded")

        return image, to_base64(encode_image(image, save_format))

    def save(
        self,
        image_id: str,
        path: Union[str, Path],
        format: Optional[Union[SaveFormat, str]] = None,
    ) -> Tuple[Path, RasterImage]:
        """
        Write the latest result of a session to disk.

        The path is resolved inside the storage directory; missing parent
        directories below it are created.

        Returns:
            Tuple of (final path, saved image)

        Raises:
            ImageNotFoundException: If image not found
            InvalidParameterException: If the format cannot be determined or the
                path escapes the storage directory
            ImageSaveException: If encoding or writing fails
        """
        image = self.get_processed(image_id)
        target, save_format = resolve_save_target(path, format, self.default_save_format)
        target = self.resolve_storage_path(target)

        if image.is_empty:
            raise ImageSaveException(target, "zero-area image cannot be encoded")

        try:
            data = encode_image(image, save_format)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save {image_id} to {target}: {e}")
            raise ImageSaveException(target, e)

        logger.info(SuccessMessages.IMAGE_SAVED.format(image_id=image_id, path=target))
        return target, image

    def delete(self, image_id: str) -> None:
        if not self.image_manager.delete(image_id):
            raise ImageNotFoundException(image_id)
        logger.info(SuccessMessages.IMAGE_DELETED.format(image_id=image_id))
