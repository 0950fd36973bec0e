"""Wiki content orchestration.

WikiService is the only entry point callers need: it routes a documentation
URL to the matching extractor, loads through the cache, and always answers
with an HTML fragment. Load failures are logged here and replaced by the
"documentation is here" fragment; they are never cached and never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from pluginwiki.cache import ContentCache
from pluginwiki.errors import ErrorCode, WikiContentError
from pluginwiki.extractors import build_extractors, find_match
from pluginwiki.fetcher import Fetcher
from pluginwiki.html import no_documentation_found, non_wiki_content

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pluginwiki.config import Settings
    from pluginwiki.extractors import WikiExtractor
    from pluginwiki.protocols import CacheProtocol, FetcherProtocol

log = structlog.get_logger()


class WikiService:
    def __init__(
        self,
        fetcher: FetcherProtocol,
        cache: CacheProtocol,
        extractors: Sequence[WikiExtractor] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._extractors: tuple[WikiExtractor, ...] = tuple(
            extractors if extractors is not None else build_extractors()
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> WikiService:
        """Wire the default fetcher, cache and extractors from configuration."""
        return cls(
            fetcher=Fetcher(settings.fetcher),
            cache=ContentCache(
                ttl_seconds=settings.cache.ttl_hours * 3600,
                max_entries=settings.cache.max_entries,
            ),
            extractors=build_extractors(github_token=settings.fetcher.github_token),
        )

    @property
    def cache(self) -> CacheProtocol:
        return self._cache

    def find_extractor(self, url: str) -> WikiExtractor | None:
        found = find_match(url, self._extractors)
        return found[0] if found is not None else None

    def is_valid_wiki_url(self, url: str) -> bool:
        """True iff some extractor recognises ``url``. Performs no I/O."""
        return self.find_extractor(url) is not None

    async def get_wiki_content(self, url: str | None) -> str:
        """Return an embeddable HTML fragment for ``url``. Never raises."""
        if url is None or not url.strip():
            log.debug("wiki_content_blank_url", code=ErrorCode.INVALID_INPUT)
            return no_documentation_found()

        if not self.is_valid_wiki_url(url):
            log.info("wiki_content_external", url=url, code=ErrorCode.UNRECOGNIZED_SOURCE)
            return non_wiki_content(url)

        try:
            return await self._cache.get_or_load(url, self._load)
        except WikiContentError as exc:
            log.warning("wiki_content_load_failed", **exc.to_dict())
        except Exception:
            log.error("wiki_content_unexpected_error", url=url, exc_info=True)
        return non_wiki_content(url)

    async def _load(self, url: str) -> str:
        found = find_match(url, self._extractors)
        if found is None:
            raise WikiContentError(
                code=ErrorCode.UNRECOGNIZED_SOURCE,
                message=f"No extractor recognises {url}",
                url=url,
            )
        extractor, match = found
        log.info("wiki_content_loading", url=url, extractor=match.kind, endpoint=match.endpoint)

        content = await self._fetcher.fetch(match.endpoint, match.headers)
        html = extractor.extract_html(content, match)
        if html is None:
            raise WikiContentError(
                code=ErrorCode.EXTRACTION_FAILURE,
                message=f"No documentation content found at {match.endpoint}",
                url=url,
            )
        return html
