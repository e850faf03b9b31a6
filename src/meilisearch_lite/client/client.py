"""High-level client for the Meilisearch REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

import httpx

from meilisearch_lite.client.dispatcher import Dispatcher
from meilisearch_lite.client.documents import DocumentsAPI
from meilisearch_lite.client.index_settings import SettingsAPI
from meilisearch_lite.client.indexes import IndexesAPI
from meilisearch_lite.client.polling import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_WAIT_TIMEOUT,
    FetchFailurePolicy,
    wait_for_pending_update,
)
from meilisearch_lite.client.search import SearchAPI
from meilisearch_lite.client.system import HealthAPI, KeysAPI, StatsAPI, VersionAPI
from meilisearch_lite.client.updates import UpdatesAPI


if TYPE_CHECKING:
    import threading

    from meilisearch_lite.client.codec import JsonCodec
    from meilisearch_lite.client.models import AsyncUpdate, UpdateStatus
    from meilisearch_lite.config import Settings
    from meilisearch_lite.observability.hooks import DispatchObserver


__all__ = ["MeilisearchClient"]


# Marks a wait argument left to the client default; None is a valid timeout
_UNSET: Any = object()


class MeilisearchClient:
    """Synchronous client for a Meilisearch server.

    Server-wide APIs are exposed as properties, index-scoped APIs through
    factory methods taking the index UID. All of them share one dispatcher,
    and therefore one connection pool.

    Example:
        ```python
        with MeilisearchClient("http://localhost:7700", api_key="masterKey") as client:
            update = client.documents("movies").add_or_replace(
                [{"id": 1, "title": "Carol"}]
            )
            status = client.default_wait_for_pending_update("movies", update)
            hits = client.search("movies").search("carol").hits
        ```
    """

    def __init__(  # noqa: PLR0913
        self,
        host: str,
        api_key: str | None = None,
        *,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.BaseTransport | None = None,
        codec: JsonCodec | None = None,
        observer: DispatchObserver | None = None,
        fetch_failure_policy: FetchFailurePolicy = FetchFailurePolicy.UNKNOWN,
        wait_timeout: float | None = DEFAULT_WAIT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize the client.

        Args:
            host: Base URL of the server (e.g. "http://localhost:7700").
            api_key: API key sent with every request; optional.
            timeout: Transport timeout configuration.
            transport: Optional custom transport for testing or advanced config.
            codec: JSON codec shared by all calls of this client.
            observer: Dispatch hook; defaults to structlog events.
            fetch_failure_policy: Default reaction of waits to failed status
                fetches.
            wait_timeout: Default deadline of waits, in seconds; None waits
                without deadline.
            poll_interval: Default delay between status polls, in seconds.
        """
        self.dispatcher = Dispatcher(
            host,
            api_key,
            timeout=timeout,
            transport=transport,
            codec=codec,
            observer=observer,
        )
        self.fetch_failure_policy = FetchFailurePolicy(fetch_failure_policy)
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval
        self.indexes = IndexesAPI(self.dispatcher)
        self.keys = KeysAPI(self.dispatcher)
        self.stats = StatsAPI(self.dispatcher)
        self.health = HealthAPI(self.dispatcher)
        self.version = VersionAPI(self.dispatcher)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> Self:
        """Build a client from loaded configuration.

        Args:
            settings: Application settings.
            transport: Optional custom transport.

        Returns:
            A client for the configured server.
        """
        server = settings.meilisearch
        return cls(
            server.host,
            server.api_key,
            timeout=httpx.Timeout(server.timeout, connect=server.connect_timeout),
            transport=transport,
            fetch_failure_policy=settings.polling.fetch_failure_policy,
            wait_timeout=settings.polling.timeout,
            poll_interval=settings.polling.interval,
        )

    @property
    def host(self) -> str:
        """Base URL of the server, without trailing slash."""
        return self.dispatcher.host

    def __enter__(self) -> Self:
        """Enter context and open the HTTP client."""
        self.dispatcher.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context and close the HTTP client."""
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.dispatcher.close()

    # -------------------------------------------------------------------------
    # Index-scoped APIs
    # -------------------------------------------------------------------------

    def documents(self, index_uid: str) -> DocumentsAPI:
        """Documents API of the index ``index_uid``."""
        return DocumentsAPI(self.dispatcher, index_uid)

    def search(self, index_uid: str) -> SearchAPI:
        """Search API of the index ``index_uid``."""
        return SearchAPI(self.dispatcher, index_uid)

    def updates(self, index_uid: str) -> UpdatesAPI:
        """Updates API of the index ``index_uid``."""
        return UpdatesAPI(self.dispatcher, index_uid)

    def settings(self, index_uid: str) -> SettingsAPI:
        """Settings API of the index ``index_uid``."""
        return SettingsAPI(self.dispatcher, index_uid)

    # -------------------------------------------------------------------------
    # Waiting for updates
    # -------------------------------------------------------------------------

    def wait_for_pending_update(  # noqa: PLR0913
        self,
        index_uid: str,
        update: AsyncUpdate | int,
        *,
        timeout: float | None = _UNSET,
        interval: float = _UNSET,
        cancel_event: threading.Event | None = None,
        on_fetch_error: FetchFailurePolicy | None = None,
    ) -> UpdateStatus:
        """Wait for the end of an update.

        Polls the update status every ``interval`` seconds until it is no
        longer ``enqueued``. See :func:`wait_for_pending_update` for details.

        Args:
            index_uid: Index the update belongs to.
            update: The update handle or its identifier.
            timeout: Seconds to wait; None waits without deadline. Defaults
                to the client's ``wait_timeout``.
            interval: Seconds between polls. Defaults to the client's
                ``poll_interval``.
            cancel_event: Event that stops the wait when set.
            on_fetch_error: Overrides the client's fetch failure policy.

        Returns:
            The final update status.
        """
        return wait_for_pending_update(
            self.updates(index_uid),
            update,
            timeout=self.wait_timeout if timeout is _UNSET else timeout,
            interval=self.poll_interval if interval is _UNSET else interval,
            cancel_event=cancel_event,
            on_fetch_error=on_fetch_error or self.fetch_failure_policy,
        )

    def default_wait_for_pending_update(
        self,
        index_uid: str,
        update: AsyncUpdate | int,
    ) -> UpdateStatus:
        """Wait up to 5 seconds for an update, polling every 50 milliseconds."""
        return self.wait_for_pending_update(
            index_uid,
            update,
            timeout=DEFAULT_WAIT_TIMEOUT,
            interval=DEFAULT_POLL_INTERVAL,
        )
