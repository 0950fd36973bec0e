"""Unit tests for pluginwiki.fetcher."""

from __future__ import annotations

import httpx
import pytest
import respx

from pluginwiki.config import FetcherSettings
from pluginwiki.errors import ErrorCode, WikiContentError
from pluginwiki.fetcher import Fetcher, build_http_client, build_timeout

URL = "https://api.github.com/repos/jenkinsci/foo-plugin/readme"

# ---------------------------------------------------------------------------
# Client construction
# ---------------------------------------------------------------------------


class TestBuildHttpClient:
    def test_default_timeouts(self) -> None:
        timeout = build_timeout(FetcherSettings())
        assert timeout.connect == 5.0
        assert timeout.read == 5.0
        assert timeout.pool == 5.0

    def test_client_configuration(self) -> None:
        client = build_http_client(FetcherSettings(user_agent="test-agent/1"))
        assert isinstance(client, httpx.AsyncClient)
        assert client.follow_redirects is True
        assert client.headers["User-Agent"] == "test-agent/1"
        assert client.timeout.connect == 5.0


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------


class TestFetcher:
    @respx.mock
    async def test_successful_fetch(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, text="<div>readme</div>"))
        result = await Fetcher(FetcherSettings()).fetch(URL)
        assert result == "<div>readme</div>"

    @respx.mock
    async def test_headers_forwarded(self) -> None:
        route = respx.get(URL).mock(return_value=httpx.Response(200, text="ok"))
        await Fetcher(FetcherSettings()).fetch(URL, {"Accept": "application/vnd.github.v3.html"})
        request = route.calls.last.request
        assert request.headers["Accept"] == "application/vnd.github.v3.html"
        assert request.headers["User-Agent"] == "pluginwiki/1.0"

    @respx.mock
    async def test_body_decoded_as_utf8(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, content="héllo ✓".encode()))
        assert await Fetcher(FetcherSettings()).fetch(URL) == "héllo ✓"

    @respx.mock
    async def test_redirect_followed(self) -> None:
        moved = "https://api.github.com/repositories/1/readme"
        respx.get(URL).mock(return_value=httpx.Response(301, headers={"Location": moved}))
        respx.get(moved).mock(return_value=httpx.Response(200, text="moved"))
        assert await Fetcher(FetcherSettings()).fetch(URL) == "moved"

    @pytest.mark.parametrize("status", [201, 204, 404, 500, 503])
    @respx.mock
    async def test_non_200_raises_upstream_failure(self, status: int) -> None:
        respx.get(URL).mock(return_value=httpx.Response(status))
        with pytest.raises(WikiContentError) as exc_info:
            await Fetcher(FetcherSettings()).fetch(URL)
        assert exc_info.value.code == ErrorCode.UPSTREAM_FAILURE
        assert exc_info.value.status_code == status
        assert exc_info.value.url == URL

    @respx.mock
    async def test_timeout_raises_upstream_failure(self) -> None:
        respx.get(URL).mock(side_effect=httpx.ReadTimeout("timed out"))
        with pytest.raises(WikiContentError) as exc_info:
            await Fetcher(FetcherSettings()).fetch(URL)
        assert exc_info.value.code == ErrorCode.UPSTREAM_FAILURE
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    @respx.mock
    async def test_connect_error_raises_upstream_failure(self) -> None:
        respx.get(URL).mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(WikiContentError) as exc_info:
            await Fetcher(FetcherSettings()).fetch(URL)
        assert exc_info.value.code == ErrorCode.UPSTREAM_FAILURE

    @respx.mock
    async def test_single_attempt(self) -> None:
        route = respx.get(URL).mock(return_value=httpx.Response(503))
        with pytest.raises(WikiContentError):
            await Fetcher(FetcherSettings()).fetch(URL)
        assert route.call_count == 1
