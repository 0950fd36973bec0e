"""In-memory documentation cache with single-flight loading.

Entries live in a ``cachetools.TTLCache``: they expire a fixed time after
they were written (reads do not extend their life) and the least recently
used entry is evicted once ``max_entries`` is reached. Nothing is persisted.

Loads are deduplicated per key: while one load for a URL is running, other
callers for the same URL await that same task and get the same result or the
same exception. A failed load stores nothing, so the next call tries again.

All state is touched from the event loop thread only, which is what makes the
plain dict of in-flight tasks safe.
"""

from __future__ import annotations

import asyncio
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from cachetools import TTLCache

from pluginwiki.models.cache import WikiCacheEntry

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = structlog.get_logger()

DEFAULT_TTL_SECONDS = 6 * 3600
DEFAULT_MAX_ENTRIES = 1000


class ContentCache:
    """Bounded, time-expiring URL → HTML fragment cache implementing CacheProtocol."""

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: TTLCache[str, WikiCacheEntry] = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer
        )
        self._inflight: dict[str, asyncio.Task[str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> WikiCacheEntry | None:
        """Return the live entry for ``key``, or ``None`` on miss or expiry."""
        return self._entries.get(key)

    async def get_or_load(self, key: str, loader: Callable[[str], Awaitable[str]]) -> str:
        """Return the cached fragment for ``key``, loading it once on a miss.

        Exceptions raised by ``loader`` propagate to every waiting caller and
        leave the cache unchanged.
        """
        entry = self._entries.get(key)
        if entry is not None:
            log.debug("cache_hit", key=key)
            return entry.content

        task = self._inflight.get(key)
        if task is None:
            log.debug("cache_miss_loading", key=key)
            task = asyncio.create_task(self._load(key, loader))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        else:
            log.debug("cache_load_joined", key=key)

        # A cancelled caller must not cancel the load other callers share.
        return await asyncio.shield(task)

    async def _load(self, key: str, loader: Callable[[str], Awaitable[str]]) -> str:
        content = await loader(key)
        self._entries[key] = WikiCacheEntry(
            url=key,
            content=content,
            fetched_at=datetime.now(UTC),
        )
        return content

    def _forget(self, key: str, task: asyncio.Task[str]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Every caller may have been cancelled; mark a failure as retrieved so
        # asyncio does not report it. Callers still waiting re-raise it.
        if not task.cancelled():
            task.exception()

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
