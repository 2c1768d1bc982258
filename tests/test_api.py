import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from unittest.mock import AsyncMock
from sharecard.core.models import FetchSuccess, FetchTimeout, FetchHTTPError
from sharecard.dependencies.metadata_deps import (
    get_metadata_assembler,
    get_upload_service,
    get_favicon_service,
)
from sharecard.main import app
from sharecard.services.asset_store import LocalAssetStore
from sharecard.services.favicon_service import FaviconService
from sharecard.services.field_extractor import FieldExtractor
from sharecard.services.metadata_assembler import MetadataAssembler
from sharecard.services.upload_service import ImageUploadService
from sharecard.services.url_resolver import URLResolver
from sharecard.services.web_fetcher import WebFetcherInterface


def png_bytes(width, height):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color="white").save(buffer, format="PNG")
    return buffer.getvalue()


class TestMetadataAPI:
    """Route tests with the services wired against a temporary project"""

    @pytest.fixture(autouse=True)
    def client(self, tmp_path):
        self.root = tmp_path
        self.store = LocalAssetStore(str(tmp_path))
        self.web_fetcher = AsyncMock(spec=WebFetcherInterface)
        assembler = MetadataAssembler(URLResolver(), self.web_fetcher, FieldExtractor(), self.store)

        app.dependency_overrides[get_metadata_assembler] = lambda: assembler
        app.dependency_overrides[get_upload_service] = lambda: ImageUploadService(self.store, enabled=True)
        app.dependency_overrides[get_favicon_service] = lambda: FaviconService(self.store)
        self.client = TestClient(app)
        yield
        app.dependency_overrides.clear()

    def test_root(self):
        response = self.client.get("/api/")

        assert response.status_code == 200
        assert "running" in response.json()["message"]

    def test_external_metadata(self):
        # Arrange
        self.web_fetcher.fetch.return_value = FetchSuccess(
            text='<title>Example Domain</title><meta property="og:image" content="/card.png">',
            final_url="https://example.com",
        )

        # Act
        response = self.client.get("/api/metadata/external", params={"url": "example.com"})

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "title": "Example Domain",
            "image": "https://example.com/card.png",
            "favicon": "https://example.com/favicon.ico",
            "hostname": "example.com",
        }

    def test_external_metadata_without_url(self):
        response = self.client.get("/api/metadata/external")

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_TARGET"
        self.web_fetcher.fetch.assert_not_called()

    def test_external_metadata_timeout(self):
        self.web_fetcher.fetch.return_value = FetchTimeout()

        response = self.client.get("/api/metadata/external", params={"url": "https://slow.example.com"})

        assert response.status_code == 408
        assert response.json()["code"] == "TARGET_TIMEOUT"
        assert "title" not in response.json()

    def test_external_metadata_upstream_status(self):
        self.web_fetcher.fetch.return_value = FetchHTTPError(status_code=502, reason="Bad Gateway")

        response = self.client.get("/api/metadata/external", params={"url": "https://example.com"})

        assert response.status_code == 502
        assert response.json()["message"] == "Failed to fetch URL: Bad Gateway"

    def test_current_metadata_not_found(self):
        response = self.client.get("/api/metadata/current")

        assert response.status_code == 404
        assert response.json()["code"] == "CONFIG_NOT_FOUND"

    def test_current_metadata(self):
        (self.root / "app").mkdir()
        (self.root / "app" / "layout.tsx").write_text("title: 'Local Site'", encoding="utf-8")

        response = self.client.get("/api/metadata/current")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Local Site"
        assert data["ogImageWidth"] == 1200
        assert data["favicon"] == "https://yourdomain.com/favicon.png"
        assert data["ogImage"] == "https://yourdomain.com/og-img.png"

    def test_upload_og_image(self):
        # Act
        response = self.client.post(
            "/api/metadata/upload-image",
            files={"file": ("card.png", png_bytes(40, 21), "image/png")},
            data={"type": "og"},
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["url"] == "/og-image.png"
        assert data["width"] == 40
        assert data["height"] == 21
        assert "uploadDate" in data
        assert (self.root / "public" / "og-image.png").exists()

    def test_upload_favicon_has_no_dimensions(self):
        response = self.client.post(
            "/api/metadata/upload-image",
            files={"file": ("icon.svg", b"<svg/>", "image/svg+xml")},
            data={"type": "favicon"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["url"] == "/favicon.svg"
        assert data["size"] == 6
        assert "width" not in data

    def test_upload_without_file(self):
        response = self.client.post("/api/metadata/upload-image", data={"type": "og"})

        assert response.status_code == 400
        assert response.json()["message"] == "No file provided"

    def test_favicon_served_from_public(self):
        (self.root / "public").mkdir()
        (self.root / "public" / "favicon.png").write_bytes(b"png-bytes")

        response = self.client.get("/favicon.ico")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert "immutable" in response.headers["cache-control"]
        assert response.content == b"png-bytes"

    def test_favicon_missing_returns_no_content(self):
        response = self.client.get("/favicon.ico")

        assert response.status_code == 204
