"""Tool handler for get_wiki_content.

Receives AppState, delegates to WikiService and returns a structured dict.
No MCP or FastMCP imports: server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from pluginwiki.models.tools import GetWikiContentOutput

if TYPE_CHECKING:
    from pluginwiki.state import AppState


async def handle(url: str, state: AppState) -> dict:
    """Handle a get_wiki_content tool call."""
    log = structlog.get_logger().bind(tool="get_wiki_content", url=url)
    log.info("handler_called")

    html = await state.wiki_service.get_wiki_content(url)
    log.info("handler_complete", content_length=len(html))

    output = GetWikiContentOutput(url=url, html=html)
    return output.model_dump(mode="json")
