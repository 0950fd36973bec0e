from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ExtractorKind(StrEnum):
    WIKI_API = "wiki_api"
    WIKI_DIRECT = "wiki_direct"
    GITHUB_README = "github_readme"
    GITHUB_CONTENTS = "github_contents"


@dataclass(frozen=True)
class WikiMatch:
    """Request plan for one documentation URL, produced by an extractor."""

    kind: ExtractorKind
    url: str  # Original documentation URL (the cache key)
    endpoint: str  # Upstream URL actually fetched
    headers: dict[str, str] = field(default_factory=dict)
    # Prefixes used when absolutizing links: host has no trailing slash,
    # base_path starts and ends with "/".
    link_host: str = ""
    image_host: str = ""
    base_path: str = "/"
    repo: str | None = None
    branch: str | None = None
