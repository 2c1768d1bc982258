import logging
from typing import Optional, Tuple

from .asset_store import AssetStoreInterface

logger = logging.getLogger(__name__)

# Served in this order for /favicon.ico
FAVICON_SOURCES = (
    ("public/favicon.ico", "image/x-icon"),
    ("app/icon.svg", "image/svg+xml"),
    ("public/favicon.png", "image/png"),
)


class FaviconService:
    """Finds the file to serve for the site's own /favicon.ico"""

    def __init__(self, asset_store: AssetStoreInterface, sources=FAVICON_SOURCES):
        self.asset_store = asset_store
        self.sources = sources

    def load(self) -> Optional[Tuple[bytes, str]]:
        """Return (content, content type) of the first existing source, or None"""
        for path, content_type in self.sources:
            if not self.asset_store.exists(path):
                continue
            try:
                return self.asset_store.read(path), content_type
            except OSError as e:
                logger.error(f"Error serving favicon from {path}: {str(e)}")
                return None
        return None
