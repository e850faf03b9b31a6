"""Document endpoints of an index."""

from __future__ import annotations

from http import HTTPMethod, HTTPStatus
from typing import TYPE_CHECKING, Any

from meilisearch_lite.client.dispatcher import RequestDescriptor
from meilisearch_lite.client.models import AsyncUpdate, ListDocumentsRequest


if TYPE_CHECKING:
    from collections.abc import Sequence

    from meilisearch_lite.client.dispatcher import Dispatcher


__all__ = ["DocumentsAPI"]


class DocumentsAPI:
    """Read and write the documents of one index.

    Documents are arbitrary JSON objects. Reads decode into ``dict`` by
    default; pass ``document_type`` (a pydantic model, a TypedDict, ...) to
    get typed documents back. Writes accept anything the JSON codec can
    encode, including pre-encoded JSON ``bytes``.

    Every write is processed asynchronously by the server and returns an
    :class:`AsyncUpdate` handle to wait on.
    """

    API_NAME = "Documents"

    def __init__(self, dispatcher: Dispatcher, index_uid: str) -> None:
        """Bind the API to the index ``index_uid``."""
        self._dispatcher = dispatcher
        self.index_uid = index_uid

    @property
    def _base(self) -> str:
        return f"/indexes/{self.index_uid}/documents"

    def get[T](
        self,
        identifier: str | int,
        document_type: type[T] = dict[str, Any],  # type: ignore[assignment]
    ) -> T:
        """Get one document by its primary key value.

        Args:
            identifier: Primary key value of the document.
            document_type: Type to decode the document into.

        Returns:
            The document.
        """
        document: T = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                f"{self._base}/{identifier}",
                function_name="Get",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=document_type,
            )
        )
        return document

    def list[T](
        self,
        request: ListDocumentsRequest | None = None,
        document_type: type[T] = dict[str, Any],  # type: ignore[assignment]
    ) -> list[T]:
        """List documents of the index.

        Args:
            request: Offset, limit and attributes to retrieve. Zero and empty
                values leave the server defaults in place.
            document_type: Type to decode each document into.

        Returns:
            The documents.
        """
        request = request or ListDocumentsRequest()
        params: dict[str, str] = {}
        if request.limit:
            params["limit"] = str(request.limit)
        if request.offset:
            params["offset"] = str(request.offset)
        if request.attributes_to_retrieve:
            params["attributesToRetrieve"] = ",".join(request.attributes_to_retrieve)

        documents: list[T] = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                self._base,
                function_name="List",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                query_params=params,
                response_type=list[document_type],  # type: ignore[valid-type]
            )
        )
        return documents

    def add_or_replace(
        self,
        documents: Sequence[Any] | bytes,
        *,
        primary_key: str | None = None,
    ) -> AsyncUpdate:
        """Add documents, replacing existing ones with the same primary key.

        Args:
            documents: The documents.
            primary_key: Primary key attribute, for an index that has none yet.

        Returns:
            Handle of the enqueued update.
        """
        return self._write(
            HTTPMethod.POST,
            documents,
            primary_key,
            "AddOrReplaceWithPrimaryKey" if primary_key else "AddOrReplace",
        )

    def add_or_update(
        self,
        documents: Sequence[Any] | bytes,
        *,
        primary_key: str | None = None,
    ) -> AsyncUpdate:
        """Add documents, merging fields into existing ones with the same key.

        Args:
            documents: The documents (partial documents are allowed).
            primary_key: Primary key attribute, for an index that has none yet.

        Returns:
            Handle of the enqueued update.
        """
        return self._write(
            HTTPMethod.PUT,
            documents,
            primary_key,
            "AddOrUpdateWithPrimaryKey" if primary_key else "AddOrUpdate",
        )

    def _write(
        self,
        method: HTTPMethod,
        documents: Sequence[Any] | bytes,
        primary_key: str | None,
        function_name: str,
    ) -> AsyncUpdate:
        update: AsyncUpdate = self._dispatcher.dispatch(
            RequestDescriptor.build(
                method,
                self._base,
                function_name=function_name,
                api_name=self.API_NAME,
                accepted=[HTTPStatus.ACCEPTED],
                payload=documents,
                query_params={"primaryKey": primary_key} if primary_key else None,
                response_type=AsyncUpdate,
            )
        )
        return update

    def delete(self, identifier: str | int) -> AsyncUpdate:
        """Delete one document by its primary key value."""
        return self._delete(f"{self._base}/{identifier}", "Delete")

    def delete_batch(self, identifiers: Sequence[str | int]) -> AsyncUpdate:
        """Delete several documents by their primary key values."""
        update: AsyncUpdate = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.POST,
                f"{self._base}/delete-batch",
                function_name="Deletes",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.ACCEPTED],
                payload=list(identifiers),
                response_type=AsyncUpdate,
            )
        )
        return update

    def delete_all(self) -> AsyncUpdate:
        """Delete every document of the index, keeping the index and settings."""
        return self._delete(self._base, "DeleteAllDocuments")

    def _delete(self, endpoint: str, function_name: str) -> AsyncUpdate:
        update: AsyncUpdate = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.DELETE,
                endpoint,
                function_name=function_name,
                api_name=self.API_NAME,
                accepted=[HTTPStatus.ACCEPTED],
                response_type=AsyncUpdate,
            )
        )
        return update
