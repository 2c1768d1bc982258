import asyncio

import httpx
import pytest
from sharecard.core.models import (
    FetchSuccess,
    FetchTimeout,
    FetchConnectionFailed,
    FetchHTTPError,
    FetchOther,
)
from sharecard.services.web_fetcher import WebFetcher


def make_fetcher(handler, timeout=1.0):
    return WebFetcher(
        timeout=timeout,
        user_agent="TestBot/1.0",
        transport=httpx.MockTransport(handler),
    )


class TestWebFetcher:
    """Unit tests for WebFetcher"""

    @pytest.mark.asyncio
    async def test_success_returns_text_and_final_url(self):
        # Arrange
        seen = {}

        def handler(request):
            seen["headers"] = request.headers
            return httpx.Response(200, html="<title>Hello</title>")

        fetcher = make_fetcher(handler)

        # Act
        outcome = await fetcher.fetch("https://example.com/")

        # Assert
        assert outcome == FetchSuccess(text="<title>Hello</title>", final_url="https://example.com/")
        assert seen["headers"]["User-Agent"] == "TestBot/1.0"
        assert seen["headers"]["Accept"].startswith("text/html")

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "https://example.com/new"})
            return httpx.Response(200, text="moved")

        fetcher = make_fetcher(handler)

        outcome = await fetcher.fetch("https://example.com/old")

        assert isinstance(outcome, FetchSuccess)
        assert outcome.final_url == "https://example.com/new"

    @pytest.mark.asyncio
    async def test_non_2xx_propagates_status_and_reason(self):
        fetcher = make_fetcher(lambda request: httpx.Response(404, text="missing"))

        outcome = await fetcher.fetch("https://example.com/missing")

        assert outcome == FetchHTTPError(status_code=404, reason="Not Found")

    @pytest.mark.asyncio
    async def test_slow_response_times_out(self):
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, text="too late")

        fetcher = make_fetcher(handler, timeout=0.05)

        outcome = await fetcher.fetch("https://slow.example.com")

        assert outcome == FetchTimeout()

    @pytest.mark.asyncio
    async def test_client_timeout_is_classified_as_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        outcome = await make_fetcher(handler).fetch("https://example.com")

        assert isinstance(outcome, FetchTimeout)

    @pytest.mark.asyncio
    async def test_connection_error_is_classified(self):
        def handler(request):
            raise httpx.ConnectError("Name or service not known", request=request)

        outcome = await make_fetcher(handler).fetch("https://nowhere.invalid")

        assert isinstance(outcome, FetchConnectionFailed)
        assert "Name or service not known" in outcome.message

    @pytest.mark.asyncio
    async def test_other_transport_error(self):
        def handler(request):
            raise httpx.RemoteProtocolError("peer closed connection", request=request)

        outcome = await make_fetcher(handler).fetch("https://example.com")

        assert isinstance(outcome, FetchOther)
        assert "peer closed connection" in outcome.message
