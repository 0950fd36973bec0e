"""Tool handler for is_valid_wiki_url."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pluginwiki.models.tools import ValidateWikiUrlOutput

if TYPE_CHECKING:
    from pluginwiki.state import AppState


async def handle(url: str, state: AppState) -> dict:
    """Handle an is_valid_wiki_url tool call. Pure: no network I/O."""
    extractor = state.wiki_service.find_extractor(url)
    output = ValidateWikiUrlOutput(
        url=url,
        valid=extractor is not None,
        extractor=extractor.kind if extractor is not None else None,
    )
    return output.model_dump(mode="json")
