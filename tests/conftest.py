"""Shared test fixtures for the pluginwiki test suite."""

from __future__ import annotations

import pytest

from pluginwiki.extractors import WikiExtractor, build_extractors
from tests.helpers import FakeClock


@pytest.fixture()
def extractors() -> tuple[WikiExtractor, ...]:
    return build_extractors()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
