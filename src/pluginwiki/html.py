"""HTML helpers for carving and normalizing documentation fragments.

All functions operate on BeautifulSoup trees built with the stdlib
``html.parser`` backend. Link rewriting and id stripping are idempotent:
running them over their own output changes nothing.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

EXTERNAL_DOCUMENTATION_PREFIX = "Documentation for this plugin is here: "
NO_DOCUMENTATION_FOUND = "No documentation for this plugin could be found"

# GitHub prefixes generated heading/anchor ids, which breaks ToC links.
USER_CONTENT_ID_PREFIX = "user-content-"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def parse_fragment(content: str) -> BeautifulSoup:
    return BeautifulSoup(content, "html.parser")


def find_by_class(content: str, class_name: str) -> Tag | None:
    """Parse ``content`` and return the first element carrying ``class_name``."""
    if not content or not content.strip():
        return None
    element = parse_fragment(content).find(class_=class_name)
    return element if isinstance(element, Tag) else None


def elements_with_attribute(root: Tag, attribute: str) -> list[Tag]:
    """Return ``root`` and every descendant that carries ``attribute``."""
    elements = [root] if root.has_attr(attribute) else []
    elements.extend(root.find_all(attrs={attribute: True}))
    return elements


def absolutize(value: str, host: str, path: str) -> str:
    """Resolve one href/src value against ``host`` and ``path``.

    ``host`` is scheme + authority (+ optional prefix) with no trailing slash;
    ``path`` is the parent folder with leading and trailing slash.
    """
    if value.startswith("//") or value.startswith("#") or _SCHEME_RE.match(value):
        return value
    if value.startswith("/"):
        return host + value
    return host + path + value


def replace_attribute(element: Tag, attribute: str, host: str, path: str) -> None:
    value = element.get(attribute)
    if not isinstance(value, str):
        return
    element[attribute] = absolutize(value, host, path)


def convert_links_to_absolute(
    root: Tag,
    host: str,
    path: str,
    *,
    image_host: str | None = None,
) -> None:
    """Rewrite every ``href`` and ``src`` under ``root`` into an absolute URL.

    ``src`` values resolve against ``image_host`` when given, so images can be
    served from a raw-content host while links point at the rendered page.
    """
    for element in elements_with_attribute(root, "href"):
        replace_attribute(element, "href", host, path)
    for element in elements_with_attribute(root, "src"):
        replace_attribute(element, "src", image_host or host, path)


def strip_user_content_id_prefix(root: Tag) -> None:
    for element in elements_with_attribute(root, "id"):
        value = element.get("id")
        if isinstance(value, str):
            element["id"] = value.replace(USER_CONTENT_ID_PREFIX, "")


def normalize_fragment(
    root: Tag,
    host: str,
    path: str,
    *,
    image_host: str | None = None,
) -> str:
    """Absolutize links, strip id prefixes and serialise ``root``."""
    convert_links_to_absolute(root, host, path, image_host=image_host)
    strip_user_content_id_prefix(root)
    return str(root)


def non_wiki_content(url: str) -> str:
    """Fragment pointing the reader at documentation we cannot embed."""
    soup = BeautifulSoup("", "html.parser")
    div = soup.new_tag("div")
    div.append(EXTERNAL_DOCUMENTATION_PREFIX)
    link = soup.new_tag("a", href=url)
    link.string = url
    div.append(link)
    return str(div)


def no_documentation_found() -> str:
    soup = BeautifulSoup("", "html.parser")
    div = soup.new_tag("div")
    div.string = NO_DOCUMENTATION_FOUND
    return str(div)
