"""HTTP fetch adapter for upstream documentation sources.

Every fetch opens its own ``httpx.AsyncClient`` inside ``async with`` so the
connection is released on success, non-200 answers, timeouts and errors
alike. One attempt per call; retrying is the caller's business.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from pluginwiki.errors import ErrorCode, WikiContentError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pluginwiki.config import FetcherSettings

log = structlog.get_logger()


def build_timeout(settings: FetcherSettings) -> httpx.Timeout:
    return httpx.Timeout(
        connect=settings.connect_timeout_seconds,
        read=settings.read_timeout_seconds,
        write=settings.read_timeout_seconds,
        pool=settings.pool_timeout_seconds,
    )


def build_http_client(settings: FetcherSettings) -> httpx.AsyncClient:
    """Create a short-lived client for a single fetch."""
    return httpx.AsyncClient(
        # GitHub answers renamed repositories with a redirect
        follow_redirects=True,
        timeout=build_timeout(settings),
        headers={"User-Agent": settings.user_agent},
    )


class Fetcher:
    """Fetches upstream documentation bodies with fixed timeouts."""

    def __init__(self, settings: FetcherSettings) -> None:
        self._settings = settings

    async def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        """Return the UTF-8 decoded body of a 200 response.

        Raises WikiContentError(UPSTREAM_FAILURE) on any other status and on
        transport errors, including timeouts.
        """
        try:
            async with build_http_client(self._settings) as client:
                response = await client.get(url, headers=dict(headers or {}))
        except httpx.HTTPError as exc:
            log.warning("fetch_failed", url=url, error=type(exc).__name__)
            raise WikiContentError(
                code=ErrorCode.UPSTREAM_FAILURE,
                message=f"Network error fetching {url}: {exc}",
                url=url,
            ) from exc

        if response.status_code != httpx.codes.OK:
            log.warning("fetch_bad_status", url=url, status_code=response.status_code)
            raise WikiContentError(
                code=ErrorCode.UPSTREAM_FAILURE,
                message=(
                    f"Unable to get content from {url} - "
                    f"returned status code {response.status_code}"
                ),
                url=url,
                status_code=response.status_code,
            )

        content = response.content.decode("utf-8", errors="replace")
        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(content),
        )
        return content
