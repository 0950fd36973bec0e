"""Protocol interfaces for swappable components.

WikiService and AppState reference these protocols, not the concrete
implementations, so tests can drop in counting fakes and a shared cache
backend could replace the in-memory one without touching the service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping


class CacheProtocol(Protocol):
    """Interface for the documentation fragment cache."""

    async def get_or_load(self, key: str, loader: Callable[[str], Awaitable[str]]) -> str: ...

    def invalidate(self, key: str) -> None: ...

    def clear(self) -> None: ...


class FetcherProtocol(Protocol):
    """Interface for the upstream HTTP fetch adapter."""

    async def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> str: ...
