"""Canned upstream payloads and test doubles shared across the suite."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

from pluginwiki.errors import ErrorCode, WikiContentError

README_URL = "https://github.com/jenkinsci/foo-plugin/blob/main/README.md"
README_ENDPOINT = "https://api.github.com/repos/jenkinsci/foo-plugin/readme?ref=main"
CONTENTS_URL = "https://github.com/jenkinsci/foo-plugin/blob/main/docs/INSTALL.md"
CONTENTS_ENDPOINT = (
    "https://api.github.com/repos/jenkinsci/foo-plugin/contents/docs/INSTALL.md?ref=main"
)
WIKI_URL = "https://wiki.jenkins.io/display/JENKINS/Git+Plugin"
WIKI_ENDPOINT = "https://wiki.jenkins.io/pages/viewpage.action?spaceKey=JENKINS&title=Git+Plugin"

GITHUB_README_HTML = (
    '<div id="readme" class="md"><article class="markdown-body">'
    '<h1><a id="user-content-foo-plugin" href="#foo-plugin">Foo</a></h1>'
    '<p>See <a href="docs/USAGE.md">usage</a> and <a href="/CHANGELOG.md">changes</a>.</p>'
    '<img src="images/logo.png"/>'
    "</article></div>"
)

CONFLUENCE_PAGE_HTML = (
    "<html><head><title>Git Plugin</title></head><body>"
    '<div id="header"><a href="/login.action">Log in</a></div>'
    '<div id="main-content" class="wiki-content">'
    '<p>Use <a href="Other+Page">another page</a> or '
    '<a href="https://example.com/x">an external one</a>.</p>'
    '<img src="/download/attachments/1/shot.png"/>'
    "</div></body></html>"
)


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """FetcherProtocol double that records calls and serves canned bodies.

    A body that is an int is answered as a non-200 upstream failure.
    """

    def __init__(self, responses: dict[str, str | int] | None = None, delay: float = 0) -> None:
        self.responses = dict(responses or {})
        self.delay = delay
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        self.calls.append((url, dict(headers or {})))
        if self.delay:
            await asyncio.sleep(self.delay)
        body = self.responses.get(url, 404)
        if isinstance(body, int):
            raise WikiContentError(
                code=ErrorCode.UPSTREAM_FAILURE,
                message=f"HTTP {body} fetching {url}",
                url=url,
                status_code=body,
            )
        return body
