"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest
import structlog

from meilisearch_lite.client import Dispatcher, MeilisearchClient
from meilisearch_lite.config import clear_settings_cache
from meilisearch_lite.observability import clear_call_context


if TYPE_CHECKING:
    from collections.abc import Generator


BASE_URL = "http://meili.test:7700"
API_KEY = "test-master-key"


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Reset logging, call context and settings cache around each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    clear_settings_cache()
    clear_call_context()
    yield
    structlog.reset_defaults()
    clear_settings_cache()
    clear_call_context()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def base_url() -> str:
    """Base URL of the mocked server."""
    return BASE_URL


@pytest.fixture
def api_key() -> str:
    """API key for test clients."""
    return API_KEY


@pytest.fixture
def dispatcher(base_url: str, api_key: str) -> Generator[Dispatcher, None, None]:
    """Dispatcher pointed at the mocked server."""
    with Dispatcher(base_url, api_key) as d:
        yield d


@pytest.fixture
def client(base_url: str, api_key: str) -> Generator[MeilisearchClient, None, None]:
    """Client pointed at the mocked server."""
    with MeilisearchClient(base_url, api_key) as c:
        yield c


@pytest.fixture
def index_json() -> dict[str, Any]:
    """Index as returned by the server."""
    return {
        "uid": "movies",
        "name": "Movies",
        "primaryKey": "id",
        "createdAt": "2020-06-01T10:00:00.000000Z",
        "updatedAt": "2020-06-01T10:05:00.000000Z",
    }


@pytest.fixture
def update_json() -> dict[str, Any]:
    """Processed update record as returned by the server."""
    return {
        "status": "processed",
        "updateId": 1,
        "type": {"name": "DocumentsAddition", "number": 2},
        "duration": 0.05,
        "enqueuedAt": "2020-06-01T10:00:00.000000Z",
        "processedAt": "2020-06-01T10:00:01.000000Z",
    }
