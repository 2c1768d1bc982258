from sharecard.services.asset_store import LocalAssetStore
from sharecard.services.favicon_service import FaviconService


class TestFaviconService:
    """Unit tests for FaviconService"""

    def test_public_ico_preferred(self, tmp_path):
        # Arrange
        (tmp_path / "public").mkdir()
        (tmp_path / "app").mkdir()
        (tmp_path / "public" / "favicon.ico").write_bytes(b"ico")
        (tmp_path / "app" / "icon.svg").write_bytes(b"<svg/>")
        service = FaviconService(LocalAssetStore(str(tmp_path)))

        # Act
        result = service.load()

        # Assert
        assert result == (b"ico", "image/x-icon")

    def test_app_icon_before_public_png(self, tmp_path):
        (tmp_path / "public").mkdir()
        (tmp_path / "app").mkdir()
        (tmp_path / "public" / "favicon.png").write_bytes(b"png")
        (tmp_path / "app" / "icon.svg").write_bytes(b"<svg/>")
        service = FaviconService(LocalAssetStore(str(tmp_path)))

        assert service.load() == (b"<svg/>", "image/svg+xml")

    def test_nothing_to_serve(self, tmp_path):
        service = FaviconService(LocalAssetStore(str(tmp_path)))

        assert service.load() is None
