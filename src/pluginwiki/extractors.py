"""Documentation URL extractors.

Each extractor recognises one upstream hosting convention. ``match`` is a pure
function of the URL and returns a ``WikiMatch`` describing which endpoint to
fetch and how to absolutize links; ``extract_html`` turns the fetched body
into a normalized HTML fragment.

The set of extractors is closed and ordered. ``find_match`` tries them in
declaration order and the first match wins; GitHub ``blob`` URLs pointing at a
top-level README are claimed by the README extractor before the contents
extractor sees them.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar
from urllib.parse import quote, unquote_plus, urlencode, urlparse

import structlog

from pluginwiki.html import find_by_class, normalize_fragment, parse_fragment
from pluginwiki.models.wiki import ExtractorKind, WikiMatch

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()

WIKI_ORIGIN = "https://wiki.jenkins.io"
WIKI_CONTENT_CLASS = "wiki-content"

GITHUB_ORG = "jenkinsci"
GITHUB_API_ROOT = "https://api.github.com"
GITHUB_HTML_MEDIA_TYPE = "application/vnd.github.v3.html"

_WIKI_HOST = r"https?://wiki\.jenkins(?:-ci\.org|\.io)"
_GITHUB_REPO = rf"https?://github\.com/{GITHUB_ORG}/(?P<repo>[^/.]+)"


def parent_folder(path: str) -> str:
    """Return ``path`` up to and including its last ``/``, rooted at ``/``."""
    folder = path[: path.rfind("/") + 1]
    if not folder.startswith("/"):
        folder = "/" + folder
    return folder


class WikiExtractor(ABC):
    """One documentation hosting convention: URL pattern plus extraction rules."""

    kind: ClassVar[ExtractorKind]
    pattern: ClassVar[re.Pattern[str]]

    def match(self, url: str) -> WikiMatch | None:
        found = self.pattern.fullmatch(url)
        if found is None:
            return None
        return self._build_match(url, found)

    @abstractmethod
    def _build_match(self, url: str, found: re.Match[str]) -> WikiMatch: ...

    @abstractmethod
    def extract_html(self, content: str, match: WikiMatch) -> str | None:
        """Return the normalized fragment, or ``None`` when no content is found."""


# ---------------------------------------------------------------------------
# Confluence wiki
# ---------------------------------------------------------------------------


class ConfluenceExtractor(WikiExtractor):
    """Shared extraction for Confluence pages: carve out the ``wiki-content`` body."""

    def extract_html(self, content: str, match: WikiMatch) -> str | None:
        element = find_by_class(content, WIKI_CONTENT_CLASS)
        if element is None:
            log.warning("wiki_content_not_found", url=match.url, endpoint=match.endpoint)
            return None
        return normalize_fragment(
            element,
            match.link_host,
            match.base_path,
            image_host=match.image_host,
        )


class ConfluenceApiExtractor(ConfluenceExtractor):
    """``/display/<SPACE>/<Title>`` pages, fetched through the page-action API."""

    kind = ExtractorKind.WIKI_API
    pattern = re.compile(
        rf"{_WIKI_HOST}/display/(?P<space>[A-Za-z0-9_~-]+)/(?P<title>[^/?#]+)/?"
    )

    def _build_match(self, url: str, found: re.Match[str]) -> WikiMatch:
        space = found.group("space")
        query = urlencode({"spaceKey": space, "title": unquote_plus(found.group("title"))})
        return WikiMatch(
            kind=self.kind,
            url=url,
            endpoint=f"{WIKI_ORIGIN}/pages/viewpage.action?{query}",
            headers={"Accept": "text/html"},
            link_host=WIKI_ORIGIN,
            image_host=WIKI_ORIGIN,
            base_path=f"/display/{space}/",
        )


class ConfluenceDirectExtractor(ConfluenceExtractor):
    """Direct render URLs (``viewpage.action?pageId=`` or ``/x/`` short links)."""

    kind = ExtractorKind.WIKI_DIRECT
    pattern = re.compile(
        rf"{_WIKI_HOST}/(?:pages/viewpage\.action\?pageId=\d+|x/[A-Za-z0-9_-]+)"
    )

    def _build_match(self, url: str, found: re.Match[str]) -> WikiMatch:
        return WikiMatch(
            kind=self.kind,
            url=url,
            endpoint=url,
            link_host=WIKI_ORIGIN,
            image_host=WIKI_ORIGIN,
            base_path=parent_folder(urlparse(url).path),
        )


# ---------------------------------------------------------------------------
# GitHub
# ---------------------------------------------------------------------------


class GithubExtractor(WikiExtractor):
    """Shared request building and extraction for the GitHub REST API.

    The API is asked for rendered HTML, so the body is already the fragment.
    """

    def __init__(self, *, github_token: str | None = None) -> None:
        self._github_token = github_token

    def headers(self) -> dict[str, str]:
        headers = {"Accept": GITHUB_HTML_MEDIA_TYPE}
        if self._github_token:
            headers["Authorization"] = f"Bearer {self._github_token}"
        return headers

    @abstractmethod
    def _endpoint(self, repo: str, found: re.Match[str]) -> str: ...

    @abstractmethod
    def _directory(self, found: re.Match[str]) -> str: ...

    def _build_match(self, url: str, found: re.Match[str]) -> WikiMatch:
        repo = found.group("repo")
        branch = found.group("branch")
        ref = branch or "HEAD"
        return WikiMatch(
            kind=self.kind,
            url=url,
            endpoint=self._endpoint(repo, found),
            headers=self.headers(),
            link_host=f"https://github.com/{GITHUB_ORG}/{repo}/blob/{ref}",
            image_host=f"https://raw.githubusercontent.com/{GITHUB_ORG}/{repo}/{ref}",
            base_path=self._directory(found),
            repo=repo,
            branch=branch,
        )

    def extract_html(self, content: str, match: WikiMatch) -> str | None:
        if not content or not content.strip():
            log.warning("github_content_empty", url=match.url, endpoint=match.endpoint)
            return None
        return normalize_fragment(
            parse_fragment(content),
            match.link_host,
            match.base_path,
            image_host=match.image_host,
        )


def _ref_query(branch: str | None) -> str:
    return f"?ref={quote(branch, safe='')}" if branch else ""


class GithubReadmeExtractor(GithubExtractor):
    """Repository root, a branch, or a top-level README: fetch the repo README."""

    kind = ExtractorKind.GITHUB_README
    pattern = re.compile(
        rf"{_GITHUB_REPO}(?:/(?:blob|tree)/(?P<branch>[^/]+)(?:/README(?:\.[A-Za-z]+)?)?)?/?"
    )

    def _endpoint(self, repo: str, found: re.Match[str]) -> str:
        return f"{GITHUB_API_ROOT}/repos/{GITHUB_ORG}/{repo}/readme{_ref_query(found.group('branch'))}"

    def _directory(self, found: re.Match[str]) -> str:
        return "/"


class GithubContentsExtractor(GithubExtractor):
    """Any Markdown or AsciiDoc file in the repository."""

    kind = ExtractorKind.GITHUB_CONTENTS
    pattern = re.compile(rf"{_GITHUB_REPO}/blob/(?P<branch>[^/]+)/(?P<path>.+\.(?:md|adoc))")

    def _endpoint(self, repo: str, found: re.Match[str]) -> str:
        return (
            f"{GITHUB_API_ROOT}/repos/{GITHUB_ORG}/{repo}/contents/{found.group('path')}"
            f"{_ref_query(found.group('branch'))}"
        )

    def _directory(self, found: re.Match[str]) -> str:
        return parent_folder(found.group("path"))


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def build_extractors(*, github_token: str | None = None) -> tuple[WikiExtractor, ...]:
    """Create the extractors in dispatch order. Called once at startup."""
    return (
        ConfluenceApiExtractor(),
        ConfluenceDirectExtractor(),
        GithubReadmeExtractor(github_token=github_token),
        GithubContentsExtractor(github_token=github_token),
    )


def find_match(
    url: str, extractors: Sequence[WikiExtractor]
) -> tuple[WikiExtractor, WikiMatch] | None:
    """Return the first extractor that recognises ``url`` with its match."""
    for extractor in extractors:
        match = extractor.match(url)
        if match is not None:
            return extractor, match
    return None
