"""Update status endpoints of an index."""

from __future__ import annotations

from http import HTTPMethod, HTTPStatus
from typing import TYPE_CHECKING

from meilisearch_lite.client.dispatcher import RequestDescriptor
from meilisearch_lite.client.models import AsyncUpdate, Update


if TYPE_CHECKING:
    from meilisearch_lite.client.dispatcher import Dispatcher


__all__ = ["UpdatesAPI"]


class UpdatesAPI:
    """Read the status records of asynchronous updates of one index."""

    API_NAME = "Updates"

    def __init__(self, dispatcher: Dispatcher, index_uid: str) -> None:
        """Bind the API to the index ``index_uid``."""
        self._dispatcher = dispatcher
        self.index_uid = index_uid

    def get(self, update: AsyncUpdate | int) -> Update:
        """Get the status record of an update.

        Args:
            update: The update handle or its identifier.

        Returns:
            The current status record.
        """
        update_id = update.update_id if isinstance(update, AsyncUpdate) else update
        record: Update = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                f"/indexes/{self.index_uid}/updates/{update_id}",
                function_name="Get",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=Update,
            )
        )
        return record

    def list(self) -> list[Update]:
        """List the status records of all updates of the index."""
        records: list[Update] = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                f"/indexes/{self.index_uid}/updates",
                function_name="List",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=list[Update],
            )
        )
        return records
