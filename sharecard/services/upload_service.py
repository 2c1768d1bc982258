import logging
import os
import posixpath
from datetime import datetime, timezone
from typing import Optional

from sharecard.core.config import settings
from sharecard.exceptions.upload import (
    UploadForbiddenException,
    MissingUploadException,
    UploadFailedException,
)
from sharecard.models.upload_model import UploadImageResponse
from .asset_store import AssetStoreInterface
from .image_probe import probe_dimensions

logger = logging.getLogger(__name__)

OG_IMAGE_KIND = "og"


class ImageUploadService:
    """
    Stores an uploaded OG image or favicon in the public asset directory.
    Only available in development; the file name is fixed per kind.
    """

    def __init__(self, asset_store: AssetStoreInterface, public_dir: str = "public", enabled: Optional[bool] = None):
        self.asset_store = asset_store
        self.public_dir = public_dir
        self.enabled = (not settings.is_production) if enabled is None else enabled

    def upload(self, filename: Optional[str], data: Optional[bytes], kind: str) -> UploadImageResponse:
        if not self.enabled:
            logger.warning("Rejected image upload outside development mode")
            raise UploadForbiddenException()
        if not filename or data is None:
            raise MissingUploadException()

        ext = os.path.splitext(filename)[1]
        target_name = f"og-image{ext}" if kind == OG_IMAGE_KIND else f"favicon{ext}"

        try:
            self.asset_store.write(posixpath.join(self.public_dir, target_name), data)
        except OSError as e:
            logger.error(f"Error uploading image {filename}: {str(e)}")
            raise UploadFailedException(filename, str(e))

        width = height = None
        if kind == OG_IMAGE_KIND:
            dimensions = probe_dimensions(data)
            if dimensions:
                width, height = dimensions

        logger.info(f"Stored {kind} upload '{filename}' as /{target_name}")
        return UploadImageResponse(
            url=f"/{target_name}",
            size=len(data),
            upload_date=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            width=width,
            height=height,
        )
