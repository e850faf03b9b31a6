"""Pydantic models for Meilisearch API requests and responses."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


__all__ = [
    "AsyncUpdate",
    "CreateIndexRequest",
    "CreateIndexResponse",
    "Index",
    "IndexSettings",
    "IndexStats",
    "Keys",
    "ListDocumentsRequest",
    "SearchRequest",
    "SearchResponse",
    "ServerErrorBody",
    "Stats",
    "Update",
    "UpdateStatus",
    "Version",
]


class UpdateStatus(StrEnum):
    """Processing status of an asynchronous update.

    Attributes:
        UNKNOWN: Status could not be determined (never sent by the server).
        ENQUEUED: The server accepted the update but did not process it yet.
        PROCESSED: The update was applied successfully.
        FAILED: The update was processed and the server reported an error.
    """

    UNKNOWN = "unknown"
    ENQUEUED = "enqueued"
    PROCESSED = "processed"
    FAILED = "failed"


class MeilisearchBaseModel(BaseModel):
    """Base model with common configuration for all Meilisearch models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # Ignore unknown fields from API
    )


# The server spells the update identifier "updateId"; older clients used
# "updateID". Both are accepted on input.
_UPDATE_ID_ALIASES = AliasChoices("updateId", "updateID", "update_id")


class Index(MeilisearchBaseModel):
    """An index on the Meilisearch server."""

    uid: str
    name: str = ""
    primary_key: str | None = None
    created_at: datetime
    updated_at: datetime


class CreateIndexRequest(MeilisearchBaseModel):
    """Request body for index creation.

    Only non-None fields are sent.
    """

    uid: str
    name: str | None = None
    primary_key: str | None = None


class CreateIndexResponse(MeilisearchBaseModel):
    """Response body for index creation."""

    uid: str
    name: str = ""
    update_id: int | None = Field(default=None, validation_alias=_UPDATE_ID_ALIASES)
    primary_key: str | None = None
    created_at: datetime
    updated_at: datetime


class IndexSettings(MeilisearchBaseModel):
    """All settings of an index.

    Fields left as None are omitted from update requests, so the server keeps
    their current value.
    """

    ranking_rules: list[str] | None = None
    distinct_attribute: str | None = None
    searchable_attributes: list[str] | None = None
    displayed_attributes: list[str] | None = None
    stop_words: list[str] | None = None
    synonyms: dict[str, list[str]] | None = None
    attributes_for_faceting: list[str] | None = None


class Version(MeilisearchBaseModel):
    """Version information of the server."""

    commit_sha: str
    build_date: datetime
    pkg_version: str


class IndexStats(MeilisearchBaseModel):
    """Statistics of a single index."""

    number_of_documents: int = 0
    is_indexing: bool = False
    fields_frequency: dict[str, int] = Field(default_factory=dict)


class Stats(MeilisearchBaseModel):
    """Statistics of the whole server."""

    database_size: int = Field(
        default=0,
        validation_alias=AliasChoices("databaseSize", "database_size"),
    )
    last_update: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("lastUpdate", "last_update"),
    )
    indexes: dict[str, IndexStats] = Field(default_factory=dict)


class Update(MeilisearchBaseModel):
    """Server-side record of an asynchronous update.

    Created when a write is accepted; moves from ``enqueued`` to
    ``processed`` or ``failed`` at the server's pace.
    """

    status: UpdateStatus = UpdateStatus.UNKNOWN
    update_id: int = Field(validation_alias=_UPDATE_ID_ALIASES)
    type: dict[str, Any] = Field(default_factory=dict)
    error: str = ""
    enqueued_at: datetime | None = None
    processed_at: datetime | None = None


class AsyncUpdate(MeilisearchBaseModel):
    """Handle returned by every write the server processes asynchronously."""

    update_id: int = Field(validation_alias=_UPDATE_ID_ALIASES)


class Keys(MeilisearchBaseModel):
    """Public and private API keys of the server."""

    public: str | None = None
    private: str | None = None


class ListDocumentsRequest(MeilisearchBaseModel):
    """Pagination and projection options for listing documents.

    Zero and empty values are not sent, leaving the server defaults in place.
    """

    offset: int = 0
    limit: int = 0
    attributes_to_retrieve: list[str] = Field(default_factory=list)


class SearchRequest(MeilisearchBaseModel):
    """Parameters of a search query.

    See the search API for the meaning of each field. ``limit`` defaults to
    20 on the server. With ``placeholder_search`` the query string is not
    sent, which returns documents without ranking by relevance.
    """

    query: str = ""
    offset: int = 0
    limit: int = 0
    attributes_to_retrieve: list[str] = Field(default_factory=list)
    attributes_to_crop: list[str] = Field(default_factory=list)
    crop_length: int = 0
    attributes_to_highlight: list[str] = Field(default_factory=list)
    filters: str = ""
    matches: bool = False
    facets_distribution: list[str] = Field(default_factory=list)
    facet_filters: Any = None
    placeholder_search: bool = False


class SearchResponse(MeilisearchBaseModel):
    """Result of a search query."""

    hits: list[Any] = Field(default_factory=list)
    nb_hits: int = 0
    offset: int = 0
    limit: int = 0
    processing_time_ms: int = 0
    query: str = ""
    facets_distribution: Any = None
    exhaustive_facets_count: Any = None


class ServerErrorBody(MeilisearchBaseModel):
    """Error payload returned by the server on failures."""

    message: str | None = None
    error_code: str | None = None
    error_type: str | None = None
    error_link: str | None = None
