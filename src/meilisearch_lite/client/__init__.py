"""Meilisearch API client module.

This module provides a synchronous HTTP client for the Meilisearch REST API:
index management, document CRUD, search, settings, and tracking of the
asynchronous updates the server applies in the background.

Example:
    ```python
    from meilisearch_lite.client import MeilisearchClient, SearchRequest

    with MeilisearchClient("http://localhost:7700", api_key="masterKey") as client:
        update = client.documents("movies").add_or_replace(
            [{"id": 1, "title": "Carol"}, {"id": 2, "title": "Wonder Woman"}],
            primary_key="id",
        )
        client.default_wait_for_pending_update("movies", update)

        result = client.search("movies").search(SearchRequest(query="wonder", limit=5))
        for hit in result.hits:
            print(hit["title"])
    ```
"""

from __future__ import annotations

from meilisearch_lite.client.client import MeilisearchClient
from meilisearch_lite.client.codec import JsonCodec
from meilisearch_lite.client.dispatcher import API_KEY_HEADER, Dispatcher, RequestDescriptor
from meilisearch_lite.client.documents import DocumentsAPI
from meilisearch_lite.client.exceptions import (
    ErrorKind,
    MeilisearchConnectionError,
    MeilisearchError,
    MeilisearchRequestError,
    MeilisearchRequestSerializationError,
    MeilisearchResponseDeserializationError,
    MeilisearchStatusCodeError,
    MeilisearchURLError,
    UpdateWaitCancelledError,
    UpdateWaitError,
    UpdateWaitTimeoutError,
)
from meilisearch_lite.client.index_settings import SettingsAPI
from meilisearch_lite.client.indexes import IndexesAPI
from meilisearch_lite.client.models import (
    AsyncUpdate,
    CreateIndexRequest,
    CreateIndexResponse,
    Index,
    IndexSettings,
    IndexStats,
    Keys,
    ListDocumentsRequest,
    SearchRequest,
    SearchResponse,
    ServerErrorBody,
    Stats,
    Update,
    UpdateStatus,
    Version,
)
from meilisearch_lite.client.polling import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_WAIT_TIMEOUT,
    FetchFailurePolicy,
    wait_for_pending_update,
)
from meilisearch_lite.client.search import SearchAPI, build_search_body
from meilisearch_lite.client.system import HealthAPI, KeysAPI, StatsAPI, VersionAPI
from meilisearch_lite.client.updates import UpdatesAPI


__all__ = [
    "API_KEY_HEADER",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_WAIT_TIMEOUT",
    "AsyncUpdate",
    "CreateIndexRequest",
    "CreateIndexResponse",
    "Dispatcher",
    "DocumentsAPI",
    "ErrorKind",
    "FetchFailurePolicy",
    "HealthAPI",
    "Index",
    "IndexSettings",
    "IndexStats",
    "IndexesAPI",
    "JsonCodec",
    "Keys",
    "KeysAPI",
    "ListDocumentsRequest",
    "MeilisearchClient",
    "MeilisearchConnectionError",
    "MeilisearchError",
    "MeilisearchRequestError",
    "MeilisearchRequestSerializationError",
    "MeilisearchResponseDeserializationError",
    "MeilisearchStatusCodeError",
    "MeilisearchURLError",
    "RequestDescriptor",
    "SearchAPI",
    "SearchRequest",
    "SearchResponse",
    "ServerErrorBody",
    "SettingsAPI",
    "Stats",
    "StatsAPI",
    "Update",
    "UpdateStatus",
    "UpdateWaitCancelledError",
    "UpdateWaitError",
    "UpdateWaitTimeoutError",
    "UpdatesAPI",
    "Version",
    "VersionAPI",
    "build_search_body",
    "wait_for_pending_update",
]
