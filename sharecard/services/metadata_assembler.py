import logging
import posixpath
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import urlparse

from sharecard.core.models import (
    MetadataRecord,
    LocalMetadataRecord,
    FetchOutcome,
    FetchSuccess,
    FetchTimeout,
    FetchConnectionFailed,
    FetchHTTPError,
)
from sharecard.exceptions.metadata import (
    MissingTargetException,
    InvalidTargetException,
    TargetTimeoutException,
    TargetUnreachableException,
    UpstreamHTTPException,
    UpstreamErrorException,
    ConfigNotFoundException,
)
from .absolutizer import absolutize, origin_from_url
from .asset_store import AssetStoreInterface
from .field_extractor import FieldExtractorInterface
from .profiles import SourceProfile, EXTERNAL_HTML_PROFILE, LOCAL_CONFIG_PROFILE
from .url_resolver import URLResolverInterface
from .web_fetcher import WebFetcherInterface

logger = logging.getLogger(__name__)

Candidate = Tuple[Callable[[], bool], Optional[str]]


@dataclass(frozen=True)
class AssetConventions:
    """Fixed file locations the local flow looks at, relative to the project root"""
    config_candidates: Tuple[str, ...] = ("src/app/layout.tsx", "app/layout.tsx")
    public_dir: str = "public"
    og_image_candidates: Tuple[str, ...] = ("og-img.png", "og-image.png")
    og_image_fallback: str = "og-img.png"
    # Platform icon convention, svg preferred over png
    platform_icons: Tuple[str, ...] = ("icon.svg", "icon.png")
    public_favicons: Tuple[str, ...] = ("favicon.png", "favicon.svg")
    favicon_fallback: str = "/favicon.png"
    external_favicon: str = "/favicon.ico"


def first_success(candidates: Iterable[Candidate], default: Optional[str] = None) -> Optional[str]:
    """Return the value of the first candidate whose probe succeeds"""
    for probe, value in candidates:
        if probe():
            return value
    return default


SITE_URL_TOKEN = "${siteUrl}"


def expand_site_url(raw_ref: Optional[str], site_base: str) -> Optional[str]:
    """Substitute a leading ``${siteUrl}`` with the full site URL, path included"""
    if raw_ref and raw_ref.startswith(SITE_URL_TOKEN):
        return site_base.rstrip("/") + raw_ref[len(SITE_URL_TOKEN):]
    return raw_ref


class MetadataAssembler:
    """
    Builds MetadataRecord objects for external pages and for the local site
    """

    def __init__(
        self,
        url_resolver: URLResolverInterface,
        web_fetcher: WebFetcherInterface,
        field_extractor: FieldExtractorInterface,
        asset_store: AssetStoreInterface,
        external_profile: SourceProfile = EXTERNAL_HTML_PROFILE,
        local_profile: SourceProfile = LOCAL_CONFIG_PROFILE,
        conventions: AssetConventions = AssetConventions(),
    ):
        self.url_resolver = url_resolver
        self.web_fetcher = web_fetcher
        self.field_extractor = field_extractor
        self.asset_store = asset_store
        self.external_profile = external_profile
        self.local_profile = local_profile
        self.conventions = conventions

    # --- External page ---

    async def assemble_external(self, raw_target: Optional[str]) -> MetadataRecord:
        """
        Fetch an external page and extract its sharing metadata.

        Args:
            raw_target: URL as typed by the user, scheme optional

        Returns:
            The record with absolute image and favicon URLs

        Raises:
            AppException: One of the metadata exceptions; no partial record is returned
        """
        if not raw_target or not raw_target.strip():
            logger.warning("Empty or whitespace-only URL parameter provided")
            raise MissingTargetException()

        url = self.url_resolver.resolve(raw_target)
        logger.info(f"Getting external metadata for URL: {url}")

        outcome = await self.web_fetcher.fetch(url)
        html = self._document_text(url, outcome)

        extracted = self.field_extractor.extract(html, self.external_profile)
        origin = origin_from_url(url)

        favicon = absolutize(extracted.get("favicon"), origin)
        if not favicon:
            favicon = absolutize(self.conventions.external_favicon, origin)

        record = MetadataRecord(
            title=extracted.get("title"),
            description=extracted.get("description"),
            image=absolutize(extracted.get("image"), origin),
            favicon=favicon,
            hostname=urlparse(url).hostname,
        )
        logger.info(f"Successfully extracted metadata for URL: {url}")
        return record

    def _document_text(self, url: str, outcome: FetchOutcome) -> str:
        if isinstance(outcome, FetchSuccess):
            return outcome.text
        if isinstance(outcome, FetchTimeout):
            raise TargetTimeoutException(url)
        if isinstance(outcome, FetchConnectionFailed):
            raise TargetUnreachableException(url, outcome.message)
        if isinstance(outcome, FetchHTTPError):
            raise UpstreamHTTPException(outcome.status_code, outcome.reason, url)

        logger.error(f"Failed to fetch external metadata for URL {url}: {outcome}")
        raise UpstreamErrorException(url)

    # --- Local site ---

    def assemble_local(self) -> LocalMetadataRecord:
        """
        Read the site's layout configuration and extract its sharing metadata.

        Missing fields fall back to the local profile defaults, and the image
        and favicon fall back to conventional asset files.

        Raises:
            ConfigNotFoundException: If none of the candidate layout files exist
        """
        config_path = self._locate_config()
        logger.info(f"Reading local metadata from {config_path}")

        text = self.asset_store.read_text(config_path)
        extracted = self.field_extractor.extract(text, self.local_profile)
        defaults = self.local_profile.defaults

        site_url = extracted.get("site_url", defaults["site_url"])
        site_base = self._site_base(site_url)
        origin = origin_from_url(site_base)

        image = expand_site_url(extracted.get("image"), site_base) or self._default_og_image()
        video = expand_site_url(extracted.get("video", defaults["video"]), site_base)
        favicon = self._resolve_favicon(config_path, extracted.get("favicon"))

        record = LocalMetadataRecord(
            title=extracted.get("title", defaults["title"]),
            description=extracted.get("description", defaults["description"]),
            image=absolutize(image, origin),
            favicon=absolutize(favicon, origin),
            site_url=site_url,
            og_image_width=int(extracted.get("og_image_width", defaults["og_image_width"])),
            og_image_height=int(extracted.get("og_image_height", defaults["og_image_height"])),
            og_image_alt=extracted.get("og_image_alt", defaults["og_image_alt"]),
            video=absolutize(video, origin),
        )
        logger.info(f"Successfully extracted local metadata from {config_path}")
        return record

    def _locate_config(self) -> str:
        for candidate in self.conventions.config_candidates:
            if self.asset_store.exists(candidate):
                return candidate

        logger.warning(f"No layout configuration found in {self.conventions.config_candidates}")
        raise ConfigNotFoundException(self.conventions.config_candidates)

    def _site_base(self, site_url: str) -> str:
        try:
            return self.url_resolver.resolve(site_url)
        except InvalidTargetException:
            logger.warning(f"Configured siteUrl '{site_url}' is not a valid URL, using the default")
            return self.local_profile.defaults["site_url"]

    def _public(self, filename: str) -> str:
        return posixpath.join(self.conventions.public_dir, filename)

    def _default_og_image(self) -> str:
        candidates = [
            (partial(self.asset_store.exists, self._public(name)), f"/{name}")
            for name in self.conventions.og_image_candidates
        ]
        # The fallback is a guess; the file may not exist
        return first_success(candidates, default=f"/{self.conventions.og_image_fallback}")

    def favicon_candidates(self, config_path: str, configured: Optional[str]) -> List[Candidate]:
        """
        Ordered favicon sources: platform icons next to the layout file, then
        in the other layout directory, then public favicons, then the icon
        declared in the configuration text.
        """
        config_dir = posixpath.dirname(config_path)
        directories = [config_dir] + [
            posixpath.dirname(candidate)
            for candidate in self.conventions.config_candidates
            if posixpath.dirname(candidate) != config_dir
        ]

        candidates: List[Candidate] = []
        for directory in directories:
            for icon in self.conventions.platform_icons:
                candidates.append((partial(self.asset_store.exists, posixpath.join(directory, icon)), f"/{icon}"))
        for favicon in self.conventions.public_favicons:
            candidates.append((partial(self.asset_store.exists, self._public(favicon)), f"/{favicon}"))
        candidates.append((lambda: configured is not None, configured))
        return candidates

    def _resolve_favicon(self, config_path: str, configured: Optional[str]) -> str:
        return first_success(
            self.favicon_candidates(config_path, configured),
            default=self.conventions.favicon_fallback,
        )
