"""Observer hooks invoked by the dispatcher at each stage of a call.

Observers see the call; they never influence it. The dispatcher logs and
discards exceptions raised by an observer, so a faulty hook cannot change
the outcome or the error classification of a request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from meilisearch_lite.observability.logging import get_logger


if TYPE_CHECKING:
    from meilisearch_lite.client.dispatcher import RequestDescriptor
    from meilisearch_lite.client.exceptions import MeilisearchRequestError


__all__ = ["DispatchObserver", "LoggingObserver", "NullObserver"]


@runtime_checkable
class DispatchObserver(Protocol):
    """Receives dispatch lifecycle events."""

    def request_started(self, descriptor: RequestDescriptor, url: str) -> None:
        """Call is about to be sent to ``url``."""

    def response_received(
        self,
        descriptor: RequestDescriptor,
        status_code: int,
        elapsed_ms: float,
    ) -> None:
        """Transport returned a response."""

    def response_decoded(self, descriptor: RequestDescriptor, value: Any) -> None:  # noqa: ANN401
        """Call succeeded; ``value`` is the decoded body or None."""

    def request_failed(
        self,
        descriptor: RequestDescriptor,
        error: MeilisearchRequestError,
    ) -> None:
        """Call failed with ``error`` (which is raised right after)."""


class NullObserver:
    """Observer that ignores every event."""

    def request_started(self, descriptor: RequestDescriptor, url: str) -> None:
        """Ignore the event."""
        pass

    def response_received(
        self,
        descriptor: RequestDescriptor,
        status_code: int,
        elapsed_ms: float,
    ) -> None:
        """Ignore the event."""
        pass

    def response_decoded(self, descriptor: RequestDescriptor, value: Any) -> None:  # noqa: ANN401
        """Ignore the event."""
        pass

    def request_failed(
        self,
        descriptor: RequestDescriptor,
        error: MeilisearchRequestError,
    ) -> None:
        """Ignore the event."""
        pass


class LoggingObserver:
    """Default observer: emits one structlog event per stage.

    Successful stages are logged at debug level, failures at info level;
    the caller decides whether a failure deserves a warning.
    """

    def __init__(self, logger_name: str = "meilisearch_lite.dispatch") -> None:
        """Initialize the observer.

        Args:
            logger_name: Name of the structlog logger to emit on.
        """
        self._logger = get_logger(logger_name)

    def request_started(self, descriptor: RequestDescriptor, url: str) -> None:
        """Log the method and URL at debug level."""
        self._logger.debug(
            "request_started",
            api=descriptor.api_name,
            function=descriptor.function_name,
            method=str(descriptor.method),
            url=url,
        )

    def response_received(
        self,
        descriptor: RequestDescriptor,
        status_code: int,
        elapsed_ms: float,
    ) -> None:
        """Log the status code and latency at debug level."""
        self._logger.debug(
            "response_received",
            api=descriptor.api_name,
            function=descriptor.function_name,
            status_code=status_code,
            elapsed_ms=round(elapsed_ms, 2),
        )

    def response_decoded(self, descriptor: RequestDescriptor, value: Any) -> None:  # noqa: ANN401
        """Log the decoded type at debug level."""
        self._logger.debug(
            "response_decoded",
            api=descriptor.api_name,
            function=descriptor.function_name,
            decoded_type=type(value).__name__,
        )

    def request_failed(
        self,
        descriptor: RequestDescriptor,
        error: MeilisearchRequestError,
    ) -> None:
        """Log the error kind and status code at info level."""
        self._logger.info(
            "request_failed",
            api=descriptor.api_name,
            function=descriptor.function_name,
            kind=str(error.kind),
            status_code=error.status_code,
            server_message=error.server_message,
        )
