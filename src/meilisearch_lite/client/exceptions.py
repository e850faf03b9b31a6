"""Custom exceptions for the Meilisearch API client."""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


__all__ = [
    "EMPTY_REQUEST",
    "EMPTY_RESPONSE",
    "ErrorKind",
    "MeilisearchConnectionError",
    "MeilisearchError",
    "MeilisearchRequestError",
    "MeilisearchRequestSerializationError",
    "MeilisearchResponseDeserializationError",
    "MeilisearchStatusCodeError",
    "MeilisearchURLError",
    "UpdateWaitCancelledError",
    "UpdateWaitError",
    "UpdateWaitTimeoutError",
]


EMPTY_REQUEST = "empty request"
EMPTY_RESPONSE = "empty response"


class ErrorKind(StrEnum):
    """Stage of a dispatch at which a request failed."""

    URL_CONSTRUCTION = "url_construction"
    REQUEST_SERIALIZATION = "request_serialization"
    TRANSPORT_EXECUTION = "transport_execution"
    UNEXPECTED_STATUS_CODE = "unexpected_status_code"
    RESPONSE_DESERIALIZATION = "response_deserialization"


class MeilisearchError(Exception):
    """Base exception for all Meilisearch client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message


class MeilisearchRequestError(MeilisearchError):
    """Base exception for a failed API call.

    Carries everything needed to reproduce the failing call without running
    it again.

    Attributes:
        kind: The dispatch stage that failed.
        endpoint: Endpoint path of the call.
        method: HTTP method of the call.
        function_name: Client operation that issued the call (e.g. "Get").
        api_name: Resource family of the call (e.g. "Indexes").
        status_code: Observed HTTP status code, if a response was received.
        expected_status_codes: Status codes the call accepts as success.
        request_text: Snapshot of the outgoing body, or "empty request".
        response_text: Snapshot of the response body, or "empty response".
        server_message: Error message reported by the server, if any.
        server_error_code: Error code reported by the server, if any.
    """

    kind: ClassVar[ErrorKind]

    def __init__(  # noqa: PLR0913
        self,
        message: str,
        *,
        endpoint: str,
        method: str,
        function_name: str,
        api_name: str,
        status_code: int | None = None,
        expected_status_codes: tuple[int, ...] = (),
        request_text: str = EMPTY_REQUEST,
        response_text: str = EMPTY_RESPONSE,
        server_message: str | None = None,
        server_error_code: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize the request error.

        Args:
            message: Human-readable error description.
            endpoint: Endpoint path of the call.
            method: HTTP method of the call.
            function_name: Client operation that issued the call.
            api_name: Resource family of the call.
            status_code: Observed HTTP status code.
            expected_status_codes: Status codes accepted as success.
            request_text: Snapshot of the outgoing body.
            response_text: Snapshot of the response body.
            server_message: Error message reported by the server.
            server_error_code: Error code reported by the server.
            cause: The lower-level exception that caused this error.
        """
        super().__init__(message)
        self.endpoint = endpoint
        self.method = method
        self.function_name = function_name
        self.api_name = api_name
        self.status_code = status_code
        self.expected_status_codes = expected_status_codes
        self.request_text = request_text
        self.response_text = response_text
        self.server_message = server_message
        self.server_error_code = server_error_code
        self.__cause__ = cause

    def __str__(self) -> str:
        """Return the message followed by the call context."""
        parts = [self.message]
        if self.status_code is not None:
            parts.append(
                f"status={self.status_code} expected={list(self.expected_status_codes)}"
            )
        if self.server_message:
            parts.append(f"server_message={self.server_message!r}")
        if self.__cause__ is not None:
            parts.append(f"cause={self.__cause__!r}")
        parts.append(
            f"(endpoint={self.endpoint!r} method={self.method} "
            f"function={self.api_name}.{self.function_name})"
        )
        return " ".join(parts)


class MeilisearchURLError(MeilisearchRequestError):
    """Raised when host and endpoint do not form a valid absolute URL.

    No network I/O has been performed.
    """

    kind = ErrorKind.URL_CONSTRUCTION


class MeilisearchRequestSerializationError(MeilisearchRequestError):
    """Raised when the request payload cannot be encoded as JSON.

    No network I/O has been performed.
    """

    kind = ErrorKind.REQUEST_SERIALIZATION


class MeilisearchConnectionError(MeilisearchRequestError):
    """Raised when the transport fails to complete the round trip.

    This includes connection refused, DNS failures, timeouts and protocol
    errors. The client never retries; retrying is up to the caller.
    """

    kind = ErrorKind.TRANSPORT_EXECUTION


class MeilisearchStatusCodeError(MeilisearchRequestError):
    """Raised when the response status code is not an accepted one."""

    kind = ErrorKind.UNEXPECTED_STATUS_CODE


class MeilisearchResponseDeserializationError(MeilisearchRequestError):
    """Raised when the response body cannot be decoded into the target type."""

    kind = ErrorKind.RESPONSE_DESERIALIZATION


class UpdateWaitError(MeilisearchError):
    """Base exception for waits on asynchronous updates that did not finish.

    Attributes:
        index_uid: The index the update belongs to.
        update_id: The update that was being waited on.
    """

    def __init__(self, message: str, *, index_uid: str, update_id: int) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            index_uid: The index the update belongs to.
            update_id: The update that was being waited on.
        """
        super().__init__(message)
        self.index_uid = index_uid
        self.update_id = update_id

    def __str__(self) -> str:
        """Return string representation with the update reference."""
        return f"{self.message} (index_uid={self.index_uid} update_id={self.update_id})"


class UpdateWaitTimeoutError(UpdateWaitError, TimeoutError):
    """Raised when the deadline expires before the update leaves "enqueued".

    Attributes:
        timeout: The timeout in seconds that was exceeded.
    """

    def __init__(self, *, index_uid: str, update_id: int, timeout: float) -> None:
        """Initialize the exception.

        Args:
            index_uid: The index the update belongs to.
            update_id: The update that was being waited on.
            timeout: The timeout in seconds that was exceeded.
        """
        super().__init__(
            f"Update did not complete within {timeout}s",
            index_uid=index_uid,
            update_id=update_id,
        )
        self.timeout = timeout


class UpdateWaitCancelledError(UpdateWaitError):
    """Raised when the caller cancels the wait."""

    def __init__(self, *, index_uid: str, update_id: int) -> None:
        """Initialize the exception.

        Args:
            index_uid: The index the update belongs to.
            update_id: The update that was being waited on.
        """
        super().__init__(
            "Wait for update was cancelled",
            index_uid=index_uid,
            update_id=update_id,
        )
