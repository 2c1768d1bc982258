import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

from sharecard.core.config import settings

logger = logging.getLogger(__name__)


class AssetStoreInterface(ABC):
    """Interface for the local site files following the Dependency Inversion Principle"""

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        pass

    @abstractmethod
    def write(self, path: str, data: bytes) -> None:
        pass

    def read_text(self, path: str) -> str:
        return self.read(path).decode("utf-8", errors="replace")


class LocalAssetStore(AssetStoreInterface):
    """
    Filesystem asset store rooted at the project directory.
    Paths are relative to the root, using forward slashes.
    """

    def __init__(self, root: Optional[str] = None):
        self.root = os.path.abspath(root or settings.project_root)

    def resolve(self, path: str) -> str:
        return os.path.join(self.root, *path.strip("/").split("/"))

    def exists(self, path: str) -> bool:
        return os.path.isfile(self.resolve(path))

    def read(self, path: str) -> bytes:
        with open(self.resolve(path), "rb") as f:
            return f.read()

    def write(self, path: str, data: bytes) -> None:
        full_path = self.resolve(path)
        directory = os.path.dirname(full_path)
        if not os.path.exists(directory):
            os.makedirs(directory)

        with open(full_path, "wb") as f:
            f.write(data)
        logger.info(f"Wrote {len(data)} bytes to {full_path}")
