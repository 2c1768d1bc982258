from typing import Optional, Dict, Any, Union
from dataclasses import dataclass


@dataclass
class MetadataRecord:
    """
    Canonical sharing metadata for one page or for the local site.

    Reference fields (image, favicon, video) are always absolute URLs or empty.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    favicon: Optional[str] = None
    hostname: Optional[str] = None
    # Local configuration only
    site_url: Optional[str] = None
    og_image_width: Optional[int] = None
    og_image_height: Optional[int] = None
    og_image_alt: Optional[str] = None
    video: Optional[str] = None

    image_key = "image"

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to the flat JSON mapping, omitting absent fields"""
        result = {
            "title": self.title,
            "description": self.description,
            self.image_key: self.image,
            "favicon": self.favicon,
            "hostname": self.hostname,
            "siteUrl": self.site_url,
            "ogImageWidth": self.og_image_width,
            "ogImageHeight": self.og_image_height,
            "ogImageAlt": self.og_image_alt,
            "video": self.video,
        }
        return {key: value for key, value in result.items() if value is not None}


@dataclass
class LocalMetadataRecord(MetadataRecord):
    """Record for the local site; the editor reads its image as ``ogImage``"""
    image_key = "ogImage"


@dataclass(frozen=True)
class Origin:
    """Scheme and host (with port, if any) used as a base for relative references"""
    scheme: str
    host: str

    def __str__(self) -> str:
        return f"{self.scheme}://{self.host}"


@dataclass(frozen=True)
class FetchSuccess:
    text: str
    final_url: str


@dataclass(frozen=True)
class FetchTimeout:
    pass


@dataclass(frozen=True)
class FetchConnectionFailed:
    message: str = ""


@dataclass(frozen=True)
class FetchHTTPError:
    status_code: int
    reason: str = ""


@dataclass(frozen=True)
class FetchOther:
    message: str = ""


FetchOutcome = Union[FetchSuccess, FetchTimeout, FetchConnectionFailed, FetchHTTPError, FetchOther]
