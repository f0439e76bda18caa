"""
Tests for ImageService
"""

import base64

import pytest
from PIL import Image

from api.exceptions import (
    ImageDecodeException,
    ImageNotFoundException,
    ImageSaveException,
    InvalidParameterException,
)
from core.enums import PixelFormat, SaveFormat
from core.image import decode_image_bytes
from enhancement import invert
from services.image_service import ImageService, resolve_save_target


class TestImageServiceLoading:
    """Loading images into sessions"""

    def test_load_bytes(self, image_service, image_manager, png_bytes, test_image):
        image_id, image, thumbnail = image_service.load_bytes(png_bytes, source="upload.png")
        assert image == test_image
        assert thumbnail
        assert image_manager.get_metadata(image_id)["source"] == "upload.png"

    def test_load_base64(self, image_service, png_bytes, test_image):
        _, image, _ = image_service.load_base64(base64.b64encode(png_bytes).decode())
        assert image == test_image

    def test_load_file(self, image_service, tmp_path, png_bytes, test_image):
        path = tmp_path / "input.png"
        path.write_bytes(png_bytes)
        image_id, image, _ = image_service.load_file(path)
        assert image == test_image
        assert image_service.get_image(image_id) == test_image

    def test_load_missing_file(self, image_service, tmp_path):
        with pytest.raises(ImageDecodeException):
            image_service.load_file(tmp_path / "nope.png")

    def test_load_relative_to_storage(self, image_service, tmp_path, png_bytes, test_image):
        (tmp_path / "in").mkdir()
        (tmp_path / "in" / "input.png").write_bytes(png_bytes)
        _, image, _ = image_service.load_file("in/input.png")
        assert image == test_image

    def test_load_outside_storage_rejected(self, image_service, tmp_path, png_bytes):
        outside = tmp_path.parent / f"{tmp_path.name}_outside.png"
        outside.write_bytes(png_bytes)
        try:
            with pytest.raises(InvalidParameterException):
                image_service.load_file(outside)
            with pytest.raises(InvalidParameterException):
                image_service.load_file(f"../{outside.name}")
        finally:
            outside.unlink()

    def test_load_corrupt_bytes(self, image_service):
        with pytest.raises(ImageDecodeException):
            image_service.load_bytes(b"\x89PNG broken")

    def test_load_bad_base64(self, image_service):
        with pytest.raises(ImageDecodeException):
            image_service.load_base64("not base64!")


class TestImageServiceExport:
    """Saving, encoding and resetting"""

    @pytest.fixture
    def image_id(self, image_service, png_bytes):
        image_id, _, _ = image_service.load_bytes(png_bytes)
        return image_id

    def test_save_adds_png_extension(self, image_service, image_id, tmp_path, test_image):
        saved, _ = image_service.save(image_id, tmp_path / "result")
        assert saved == (tmp_path / "result.png").resolve()
        assert decode_image_bytes(saved.read_bytes()) == test_image

    def test_save_writes_processed(
        self, image_service, enhancement_service, image_id, tmp_path, test_image
    ):
        enhancement_service.apply(image_id, "invert")
        saved, _ = image_service.save(image_id, tmp_path / "out" / "negative.png")
        assert decode_image_bytes(saved.read_bytes()) == invert(test_image)

    def test_save_format_from_extension(self, image_service, image_id, tmp_path):
        saved, _ = image_service.save(image_id, tmp_path / "photo.JPG")
        with Image.open(saved) as written:
            assert written.format == "JPEG"

    def test_save_explicit_format(self, image_service, image_id, tmp_path):
        saved, _ = image_service.save(image_id, tmp_path / "plain", SaveFormat.BMP)
        assert saved.suffix == ".bmp"

    def test_save_outside_storage_rejected(self, image_service, image_id, tmp_path):
        target = tmp_path.parent / f"{tmp_path.name}_escape" / "out.png"
        with pytest.raises(InvalidParameterException):
            image_service.save(image_id, target)
        with pytest.raises(InvalidParameterException):
            image_service.save(image_id, "../../escape.png")
        assert not target.parent.exists()

    def test_save_relative_path_lands_in_storage(self, image_service, image_id, tmp_path):
        saved, _ = image_service.save(image_id, "exports/result")
        assert saved == (tmp_path / "exports" / "result.png").resolve()
        assert saved.exists()

    def test_save_uses_configured_default_format(self, image_manager, image_id, tmp_path):
        service = ImageService(image_manager, storage_dir=tmp_path, default_save_format="BMP")
        saved, _ = service.save(image_id, "result")
        assert saved.name == "result.bmp"
        with Image.open(saved) as written:
            assert written.format == "BMP"

    def test_save_unknown_extension(self, image_service, image_id, tmp_path):
        with pytest.raises(InvalidParameterException):
            image_service.save(image_id, tmp_path / "result.xyz")

    def test_save_unwritable(self, image_service, image_id, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ImageSaveException):
            image_service.save(image_id, blocker / "result.png")

    def test_save_unknown_image(self, image_service, tmp_path):
        with pytest.raises(ImageNotFoundException):
            image_service.save("img_missing", tmp_path / "x.png")

    def test_encode_result(self, image_service, image_id, test_image):
        image, data = image_service.encode_result(image_id)
        assert image == test_image
        assert decode_image_bytes(base64.b64decode(data)) == test_image

    def test_encode_result_preview(self, image_service, image_id):
        image, _ = image_service.encode_result(image_id, "jpeg", max_dimension=40)
        assert max(image.width, image.height) == 40

    def test_reset(self, image_service, enhancement_service, image_id, test_image):
        enhancement_service.apply(image_id, "threshold", {"threshold": 10})
        assert image_service.get_processed(image_id).pixel_format == PixelFormat.GRAY

        original, thumbnail = image_service.reset(image_id)
        assert original == test_image
        assert thumbnail
        assert image_service.get_processed(image_id) == test_image

    def test_delete(self, image_service, image_id):
        image_service.delete(image_id)
        with pytest.raises(ImageNotFoundException):
            image_service.get_image(image_id)
        with pytest.raises(ImageNotFoundException):
            image_service.delete(image_id)


class TestResolveSaveTarget:
    """Path and format resolution for saving"""

    def test_no_extension_defaults_to_png(self):
        path, fmt = resolve_save_target("out/result")
        assert str(path).endswith("result.png")
        assert fmt == SaveFormat.PNG

    def test_no_extension_with_format(self):
        path, fmt = resolve_save_target("result", "jpeg")
        assert path.name == "result.jpg"
        assert fmt == SaveFormat.JPEG

    def test_tiff_extension(self):
        _, fmt = resolve_save_target("scan.tif")
        assert fmt == SaveFormat.TIFF

    def test_explicit_format_wins(self):
        path, fmt = resolve_save_target("image.png", SaveFormat.BMP)
        assert path.name == "image.png"
        assert fmt == SaveFormat.BMP

    def test_invalid_format(self):
        with pytest.raises(InvalidParameterException):
            resolve_save_target("image", "gif")

    def test_no_extension_uses_default_format(self):
        path, fmt = resolve_save_target("result", default_format="tiff")
        assert path.name == "result.tiff"
        assert fmt == SaveFormat.TIFF
