"""Shared pytest fixtures for feed and pipeline tests."""

from __future__ import annotations

import pytest
import structlog

from factories import FakeFetcher


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def reset_logging():
    yield
    structlog.reset_defaults()
