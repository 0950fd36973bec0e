"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
import uvicorn
from mcp.server.fastmcp import Context, FastMCP

import pluginwiki.tools.get_wiki_content as t_get_content
import pluginwiki.tools.is_valid_wiki_url as t_is_valid
from pluginwiki import __version__
from pluginwiki.config import Settings
from pluginwiki.service import WikiService
from pluginwiki.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Construct the shared service once for the server's lifetime."""
    return AppState(settings=settings, wiki_service=WikiService.from_settings(settings))


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        transport=settings.server.transport,
    )

    state = build_state(settings)

    log.info(
        "server_started",
        version=__version__,
        transport=settings.server.transport,
        cache_ttl_hours=settings.cache.ttl_hours,
        cache_max_entries=settings.cache.max_entries,
    )

    try:
        yield state
    finally:
        # In-memory only: nothing to flush, the cache dies with the process.
        state.wiki_service.cache.clear()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("pluginwiki", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg, so set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


@mcp.tool()
async def get_wiki_content(url: str, ctx: Context) -> object:
    """Fetch a plugin's documentation URL as an embeddable HTML fragment.

    Supports wiki.jenkins.io pages and jenkinsci GitHub READMEs or .md/.adoc
    files. Any other URL, or a source that cannot be loaded, yields a short
    fragment linking to the original documentation.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_get_content.handle(url, state)
    except Exception:
        log.error("tool_unexpected_error", tool="get_wiki_content", exc_info=True)
        raise


@mcp.tool()
async def is_valid_wiki_url(url: str, ctx: Context) -> object:
    """Report whether a documentation URL points at a supported source."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_is_valid.handle(url, state)
    except Exception:
        log.error("tool_unexpected_error", tool="is_valid_wiki_url", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# HTTP transport
# ---------------------------------------------------------------------------


def run_http_server(settings: Settings) -> None:
    """Start the MCP server with Streamable HTTP transport."""
    _setup_logging(settings)
    structlog.get_logger().bind(transport="http").info(
        "http_server_starting", host=settings.server.host, port=settings.server.port
    )

    uvicorn.run(
        mcp.streamable_http_app(),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()

    if settings.server.transport == "http":
        run_http_server(settings)
        return

    mcp.run()


if __name__ == "__main__":
    main()
