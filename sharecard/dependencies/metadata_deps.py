from sharecard.services.container import container
from sharecard.services.favicon_service import FaviconService
from sharecard.services.metadata_assembler import MetadataAssembler
from sharecard.services.upload_service import ImageUploadService


def get_metadata_assembler() -> MetadataAssembler:
    """FastAPI dependency for the metadata routes"""
    return container.get_metadata_assembler()


def get_upload_service() -> ImageUploadService:
    return container.get_service(ImageUploadService)


def get_favicon_service() -> FaviconService:
    return container.get_service(FaviconService)
