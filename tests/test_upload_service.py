import io

import pytest
from PIL import Image
from unittest.mock import MagicMock
from sharecard.exceptions.upload import (
    UploadForbiddenException,
    MissingUploadException,
    UploadFailedException,
)
from sharecard.services.asset_store import AssetStoreInterface, LocalAssetStore
from sharecard.services.image_probe import probe_dimensions
from sharecard.services.upload_service import ImageUploadService


def jpeg_bytes(width, height):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height)).save(buffer, format="JPEG")
    return buffer.getvalue()


class TestImageUploadService:
    """Unit tests for ImageUploadService"""

    @pytest.fixture(autouse=True)
    def service(self, tmp_path):
        self.root = tmp_path
        self.service = ImageUploadService(LocalAssetStore(str(tmp_path)), enabled=True)

    def test_og_upload_is_stored_with_dimensions(self):
        # Arrange
        data = jpeg_bytes(1200, 630)

        # Act
        result = self.service.upload("photo.jpg", data, "og")

        # Assert
        assert result.url == "/og-image.jpg"
        assert result.size == len(data)
        assert (result.width, result.height) == (1200, 630)
        assert (self.root / "public" / "og-image.jpg").read_bytes() == data
        assert result.upload_date.endswith("Z")

    def test_favicon_upload_skips_probe(self):
        result = self.service.upload("fav.png", b"not really a png", "favicon")

        assert result.url == "/favicon.png"
        assert result.width is None
        assert result.height is None

    def test_unreadable_og_image_keeps_upload(self):
        result = self.service.upload("broken.png", b"garbage", "og")

        assert result.url == "/og-image.png"
        assert result.width is None

    def test_disabled_in_production(self):
        service = ImageUploadService(LocalAssetStore(str(self.root)), enabled=False)

        with pytest.raises(UploadForbiddenException) as exc_info:
            service.upload("photo.jpg", b"data", "og")

        assert exc_info.value.status_code == 403

    def test_missing_file(self):
        with pytest.raises(MissingUploadException):
            self.service.upload(None, None, "og")

    def test_write_failure(self):
        store = MagicMock(spec=AssetStoreInterface)
        store.write.side_effect = PermissionError("read-only file system")
        service = ImageUploadService(store, enabled=True)

        with pytest.raises(UploadFailedException) as exc_info:
            service.upload("photo.jpg", b"data", "og")

        assert exc_info.value.details["reason"] == "read-only file system"


class TestProbeDimensions:
    """Unit tests for probe_dimensions"""

    def test_reads_size(self):
        assert probe_dimensions(jpeg_bytes(31, 17)) == (31, 17)

    def test_invalid_bytes(self):
        assert probe_dimensions(b"\x00\x01") is None
