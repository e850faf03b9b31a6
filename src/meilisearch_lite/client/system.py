"""Server-wide endpoints: keys, stats, health and version."""

from __future__ import annotations

from http import HTTPMethod, HTTPStatus
from typing import TYPE_CHECKING

from meilisearch_lite.client.dispatcher import RequestDescriptor
from meilisearch_lite.client.models import IndexStats, Keys, Stats, Version


if TYPE_CHECKING:
    from meilisearch_lite.client.dispatcher import Dispatcher


__all__ = ["HealthAPI", "KeysAPI", "StatsAPI", "VersionAPI"]


class KeysAPI:
    """API keys of the server (requires the master key)."""

    API_NAME = "Keys"

    def __init__(self, dispatcher: Dispatcher) -> None:
        """Bind the API to a dispatcher."""
        self._dispatcher = dispatcher

    def get(self) -> Keys:
        """Get the public and private keys of the server."""
        keys: Keys = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                "/keys",
                function_name="Get",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=Keys,
            )
        )
        return keys


class StatsAPI:
    """Database and index statistics."""

    API_NAME = "Stats"

    def __init__(self, dispatcher: Dispatcher) -> None:
        """Bind the API to a dispatcher."""
        self._dispatcher = dispatcher

    def get(self, index_uid: str) -> IndexStats:
        """Get the statistics of one index."""
        stats: IndexStats = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                f"/indexes/{index_uid}/stats",
                function_name="Get",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=IndexStats,
            )
        )
        return stats

    def get_all(self) -> Stats:
        """Get the statistics of the database and of every index."""
        stats: Stats = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                "/stats",
                function_name="GetAll",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=Stats,
            )
        )
        return stats


class HealthAPI:
    """Health status of the server."""

    API_NAME = "Health"

    def __init__(self, dispatcher: Dispatcher) -> None:
        """Bind the API to a dispatcher."""
        self._dispatcher = dispatcher

    def get(self) -> bool:
        """Check that the server is healthy.

        Returns:
            True when the server answers 204.

        Raises:
            MeilisearchStatusCodeError: When the server reports itself
                unhealthy (any other status).
            MeilisearchConnectionError: When the server is unreachable.
        """
        self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                "/health",
                function_name="Get",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.NO_CONTENT],
            )
        )
        return True

    def update(self, healthy: bool) -> None:  # noqa: FBT001
        """Put the server in or out of maintenance mode."""
        self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.PUT,
                "/health",
                function_name="Update",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.NO_CONTENT],
                payload={"health": healthy},
            )
        )


class VersionAPI:
    """Version of the server."""

    API_NAME = "Version"

    def __init__(self, dispatcher: Dispatcher) -> None:
        """Bind the API to a dispatcher."""
        self._dispatcher = dispatcher

    def get(self) -> Version:
        """Get the version and build information of the server."""
        version: Version = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                "/version",
                function_name="Get",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=Version,
            )
        )
        return version
