from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class WikiCacheEntry(BaseModel):
    """Cleaned documentation fragment cached for a documentation URL."""

    url: str  # Original documentation URL, not the upstream endpoint
    content: str  # Normalized HTML fragment
    fetched_at: datetime
