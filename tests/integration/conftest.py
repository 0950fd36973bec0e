"""Integration test fixtures.

Provides a fully wired AppState: real Fetcher (HTTP mocked with respx),
real ContentCache and the default extractor set.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from pluginwiki.config import Settings
from pluginwiki.service import WikiService
from pluginwiki.state import AppState


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def app_state(settings: Settings) -> AppState:
    return AppState(settings=settings, wiki_service=WikiService.from_settings(settings))


@pytest.fixture()
def ctx(app_state: AppState) -> SimpleNamespace:
    """Stand-in for the MCP Context handed to tool functions."""
    return SimpleNamespace(request_context=SimpleNamespace(lifespan_context=app_state))
