import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from sharecard.core.config import settings
from sharecard.core.models import (
    FetchOutcome,
    FetchSuccess,
    FetchTimeout,
    FetchConnectionFailed,
    FetchHTTPError,
    FetchOther,
)

logger = logging.getLogger(__name__)


class WebFetcherInterface(ABC):
    """Interface for fetching web content following the Dependency Inversion Principle"""

    @abstractmethod
    async def fetch(self, url: str) -> FetchOutcome:
        pass


class WebFetcher(WebFetcherInterface):
    """
    Fetches a remote document within a hard wall-clock bound.
    Failures are returned as FetchOutcome variants instead of raised.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        accept: Optional[str] = None,
        follow_redirects: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = settings.fetch_timeout if timeout is None else timeout
        self.user_agent = user_agent or settings.fetch_user_agent
        self.accept = accept or settings.fetch_accept
        self.follow_redirects = settings.fetch_follow_redirects if follow_redirects is None else follow_redirects
        self.transport = transport

    async def fetch(self, url: str) -> FetchOutcome:
        """Fetch the document at url and classify the result"""
        logger.info(f"Fetching document from URL: {url}")

        try:
            outcome = await asyncio.wait_for(self._get(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Fetching URL {url} exceeded {self.timeout}s, request cancelled")
            return FetchTimeout()
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout occurred while fetching URL {url}: {str(e)}")
            return FetchTimeout()
        except httpx.ConnectError as e:
            logger.error(f"Connection error occurred while fetching URL {url}: {str(e)}")
            return FetchConnectionFailed(message=str(e))
        except httpx.HTTPError as e:
            logger.error(f"Request error occurred while fetching URL {url}: {str(e)}")
            return FetchOther(message=str(e))
        except Exception as e:
            logger.exception(f"An unexpected error occurred while fetching URL {url}: {str(e)}")
            return FetchOther(message=str(e))

        return outcome

    async def _get(self, url: str) -> FetchOutcome:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
        }

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            transport=self.transport,
        ) as client:
            res = await client.get(url, headers=headers)

            if not res.is_success:
                logger.warning(f"HTTP error {res.status_code} {res.reason_phrase} while fetching URL {url}")
                return FetchHTTPError(status_code=res.status_code, reason=res.reason_phrase)

            logger.info(f"Successfully fetched document from URL: {url}")
            return FetchSuccess(text=res.text, final_url=str(res.url))
