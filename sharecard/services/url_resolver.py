import logging
from urllib.parse import urlparse
from abc import ABC, abstractmethod

from sharecard.exceptions.metadata import InvalidTargetException

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http://", "https://")
DEFAULT_SCHEME = "https://"


class URLResolverInterface(ABC):
    """Interface for URL resolution following the Dependency Inversion Principle"""

    @abstractmethod
    def resolve(self, raw_input: str) -> str:
        """
        Normalize user input into an absolute, fetchable URL.

        Args:
            raw_input: The URL string as typed by the user

        Returns:
            The absolute URL

        Raises:
            InvalidTargetException: If the input cannot be parsed as a URL
        """
        pass


class URLResolver(URLResolverInterface):
    """
    Turns user input such as ``example.com`` into ``https://example.com``.
    There is no fallback to plain http when the https attempt later fails.
    """

    def resolve(self, raw_input: str) -> str:
        candidate = (raw_input or "").strip()
        if not candidate.lower().startswith(SUPPORTED_SCHEMES):
            candidate = f"{DEFAULT_SCHEME}{candidate}"

        try:
            parsed = urlparse(candidate)
            # Accessing .port validates it (non-numeric or out of range raises)
            parsed.port
        except ValueError as e:
            logger.warning(f"Failed to parse URL {candidate}: {str(e)}")
            raise InvalidTargetException(raw_input)

        netloc = parsed.netloc
        if not netloc or not parsed.hostname or any(ch.isspace() for ch in netloc):
            logger.warning(f"URL has no usable host: {candidate}")
            raise InvalidTargetException(raw_input)

        return candidate
