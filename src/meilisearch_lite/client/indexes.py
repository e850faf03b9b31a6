"""Index management endpoints."""

from __future__ import annotations

from http import HTTPMethod, HTTPStatus
from typing import TYPE_CHECKING

from meilisearch_lite.client.dispatcher import RequestDescriptor
from meilisearch_lite.client.models import CreateIndexRequest, CreateIndexResponse, Index


if TYPE_CHECKING:
    from meilisearch_lite.client.dispatcher import Dispatcher


__all__ = ["IndexesAPI"]


class IndexesAPI:
    """Create, inspect, rename and delete indexes."""

    API_NAME = "Indexes"

    def __init__(self, dispatcher: Dispatcher) -> None:
        """Bind the API to a dispatcher."""
        self._dispatcher = dispatcher

    def get(self, uid: str) -> Index:
        """Get an index by UID.

        Args:
            uid: The index UID.

        Returns:
            The index.
        """
        index: Index = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                f"/indexes/{uid}",
                function_name="Get",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=Index,
            )
        )
        return index

    def list(self) -> list[Index]:
        """List all indexes."""
        indexes: list[Index] = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                "/indexes",
                function_name="List",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=list[Index],
            )
        )
        return indexes

    def create(self, request: CreateIndexRequest) -> CreateIndexResponse:
        """Create an index.

        Args:
            request: UID and optional name and primary key of the new index.

        Returns:
            The created index.
        """
        created: CreateIndexResponse = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.POST,
                "/indexes",
                function_name="Create",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.CREATED],
                payload=request,
                response_type=CreateIndexResponse,
            )
        )
        return created

    def update_name(self, uid: str, name: str) -> Index:
        """Rename an index."""
        return self._update(uid, {"name": name}, "UpdateName")

    def update_primary_key(self, uid: str, primary_key: str) -> Index:
        """Set the primary key of an index that has none yet."""
        return self._update(uid, {"primaryKey": primary_key}, "UpdatePrimaryKey")

    def _update(self, uid: str, body: dict[str, str], function_name: str) -> Index:
        index: Index = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.PUT,
                f"/indexes/{uid}",
                function_name=function_name,
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                payload=body,
                response_type=Index,
            )
        )
        return index

    def delete(self, uid: str) -> bool:
        """Delete an index.

        Args:
            uid: The index UID.

        Returns:
            True once the server confirmed the deletion (204).

        Raises:
            MeilisearchStatusCodeError: For any other status code, e.g. 404
                when the index does not exist.
        """
        self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.DELETE,
                f"/indexes/{uid}",
                function_name="Delete",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.NO_CONTENT],
            )
        )
        return True
