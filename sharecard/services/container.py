from typing import Dict, Optional, Type, TypeVar

from .asset_store import AssetStoreInterface, LocalAssetStore
from .favicon_service import FaviconService
from .field_extractor import FieldExtractor, FieldExtractorInterface
from .metadata_assembler import MetadataAssembler
from .upload_service import ImageUploadService
from .url_resolver import URLResolver, URLResolverInterface
from .web_fetcher import WebFetcher, WebFetcherInterface

T = TypeVar('T')


class ServiceContainer:
    """Container for managing service dependencies with dependency injection"""

    def __init__(self, project_root: Optional[str] = None):
        self.project_root = project_root
        self._services: Dict[Type, object] = {}

        # Register services in dependency order
        self._register_services()

    def _register_services(self) -> None:
        """Register all services with proper dependency injection"""
        self._services[URLResolverInterface] = URLResolver()
        self._services[WebFetcherInterface] = WebFetcher()
        self._services[FieldExtractorInterface] = FieldExtractor()
        self._services[AssetStoreInterface] = LocalAssetStore(self.project_root)

        # Services with dependencies
        self._services[MetadataAssembler] = MetadataAssembler(
            self._services[URLResolverInterface],
            self._services[WebFetcherInterface],
            self._services[FieldExtractorInterface],
            self._services[AssetStoreInterface],
        )
        self._services[ImageUploadService] = ImageUploadService(self._services[AssetStoreInterface])
        self._services[FaviconService] = FaviconService(self._services[AssetStoreInterface])

    def get_metadata_assembler(self) -> MetadataAssembler:
        """Get the metadata assembler instance"""
        return self._services[MetadataAssembler]  # type: ignore

    def get_service(self, interface: Type[T]) -> T:
        """Generic method to retrieve a service by its interface"""
        service = self._services.get(interface)
        if service is None:
            raise ValueError(f"Service for interface {interface.__name__} not found")
        return service  # type: ignore


container = ServiceContainer()
