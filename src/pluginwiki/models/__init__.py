from __future__ import annotations

from pluginwiki.models.cache import WikiCacheEntry
from pluginwiki.models.tools import GetWikiContentOutput, ValidateWikiUrlOutput
from pluginwiki.models.wiki import ExtractorKind, WikiMatch

__all__ = [
    # wiki
    "ExtractorKind",
    "WikiMatch",
    # cache
    "WikiCacheEntry",
    # tools
    "GetWikiContentOutput",
    "ValidateWikiUrlOutput",
]
