"""Request descriptors and the dispatcher that executes them.

Every API call made by the resource facades goes through
:meth:`Dispatcher.dispatch`: the descriptor says what to call and what
counts as success, the dispatcher performs the round trip, classifies the
outcome and decodes the body.
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from http import HTTPMethod
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from meilisearch_lite.client.codec import JsonCodec
from meilisearch_lite.client.exceptions import (
    EMPTY_REQUEST,
    EMPTY_RESPONSE,
    MeilisearchConnectionError,
    MeilisearchRequestError,
    MeilisearchRequestSerializationError,
    MeilisearchResponseDeserializationError,
    MeilisearchStatusCodeError,
    MeilisearchURLError,
)
from meilisearch_lite.client.models import ServerErrorBody
from meilisearch_lite.observability.hooks import DispatchObserver, LoggingObserver
from meilisearch_lite.observability.logging import (
    clear_call_context,
    get_call_id,
    get_logger,
    set_call_id,
)


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


__all__ = ["API_KEY_HEADER", "Dispatcher", "RequestDescriptor"]


API_KEY_HEADER = "X-Meili-API-Key"


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """Immutable description of one API call.

    Attributes:
        endpoint: Path relative to the host, may embed a query string.
        method: HTTP method.
        function_name: Client operation name, for error reports.
        api_name: Resource family name, for error reports.
        payload: Value sent as the JSON body, or None for no body.
        query_params: Query parameters; they override any key of the same
            name embedded in ``endpoint``.
        response_type: Type the body is decoded into, or None to never look
            at the body.
        accepted_status_codes: Exhaustive set of status codes treated as
            success. Empty means any status code is accepted.
    """

    endpoint: str
    method: HTTPMethod
    function_name: str
    api_name: str
    payload: Any = None
    query_params: Mapping[str, str] | None = None
    response_type: Any = None
    accepted_status_codes: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Normalize the method and status codes, and freeze the query."""
        # Freeze the mutable inputs so a descriptor cannot change after build
        object.__setattr__(self, "method", HTTPMethod(self.method))
        object.__setattr__(
            self,
            "accepted_status_codes",
            frozenset(int(code) for code in self.accepted_status_codes),
        )
        if self.query_params is not None:
            object.__setattr__(
                self,
                "query_params",
                MappingProxyType(dict(self.query_params)),
            )

    @classmethod
    def build(  # noqa: PLR0913
        cls,
        method: HTTPMethod | str,
        endpoint: str,
        *,
        function_name: str,
        api_name: str,
        accepted: Iterable[int] = (),
        payload: Any = None,  # noqa: ANN401
        query_params: Mapping[str, str] | None = None,
        response_type: Any = None,  # noqa: ANN401
    ) -> Self:
        """Shorthand constructor used by the resource facades."""
        return cls(
            endpoint=endpoint,
            method=HTTPMethod(method),
            function_name=function_name,
            api_name=api_name,
            payload=payload,
            query_params=query_params,
            response_type=response_type,
            accepted_status_codes=frozenset(accepted),
        )


@dataclass(slots=True)
class _CallDiagnostics:
    """Context collected while dispatching, turned into an error on failure."""

    descriptor: RequestDescriptor
    request_text: str = EMPTY_REQUEST
    response_text: str = EMPTY_RESPONSE
    status_code: int | None = None
    server_message: str | None = None
    server_error_code: str | None = None

    def error[E: MeilisearchRequestError](
        self,
        error_cls: type[E],
        message: str,
        *,
        cause: BaseException | None = None,
    ) -> E:
        descriptor = self.descriptor
        return error_cls(
            message,
            endpoint=descriptor.endpoint,
            method=str(descriptor.method),
            function_name=descriptor.function_name,
            api_name=descriptor.api_name,
            status_code=self.status_code,
            expected_status_codes=tuple(sorted(descriptor.accepted_status_codes)),
            request_text=self.request_text,
            response_text=self.response_text,
            server_message=self.server_message,
            server_error_code=self.server_error_code,
            cause=cause,
        )


class Dispatcher:
    """Executes request descriptors against a Meilisearch server.

    The dispatcher holds the only persistent state of the client: host, API
    key, timeout, its JSON codec and a lazily created ``httpx.Client``. Each
    call is otherwise self-contained and performs exactly one round trip;
    nothing is retried.

    Example:
        ```python
        with Dispatcher("http://localhost:7700", api_key="masterKey") as d:
            index = d.dispatch(
                RequestDescriptor.build(
                    "GET",
                    "/indexes/movies",
                    function_name="Get",
                    api_name="Indexes",
                    accepted=[200],
                    response_type=Index,
                )
            )
        ```
    """

    DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)

    def __init__(  # noqa: PLR0913
        self,
        host: str,
        api_key: str | None = None,
        *,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.BaseTransport | None = None,
        codec: JsonCodec | None = None,
        observer: DispatchObserver | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            host: Base URL of the server (e.g. "http://localhost:7700").
            api_key: Value of the API key header; empty or None sends none.
            timeout: Transport timeout configuration.
            transport: Optional custom transport for testing or advanced
                config. Defaults to an ``httpx.HTTPTransport`` without retries.
            codec: JSON codec; a private one is created by default.
            observer: Dispatch hook; defaults to structlog events.
        """
        self.host = host.rstrip("/")
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT
        self._api_key = api_key or None
        self._transport = transport
        self._client: httpx.Client | None = None
        self.codec = codec or JsonCodec()
        self.observer: DispatchObserver = observer or LoggingObserver()
        self._logger = get_logger(__name__)

    @property
    def _headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers[API_KEY_HEADER] = self._api_key
        return headers

    def __enter__(self) -> Self:
        """Enter context and create the HTTP client."""
        self._ensure_client()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context and close the HTTP client."""
        self.close()

    def _ensure_client(self) -> httpx.Client:
        """Ensure the HTTP client is initialized."""
        if self._client is None or self._client.is_closed:
            transport = self._transport or httpx.HTTPTransport(retries=0)
            self._client = httpx.Client(timeout=self.timeout, transport=transport)
        return self._client

    def close(self) -> None:
        """Close the HTTP client and release its connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def dispatch(self, descriptor: RequestDescriptor) -> Any:  # noqa: ANN401
        """Execute one call and resolve it into a decoded value or an error.

        Args:
            descriptor: The call to make.

        Returns:
            The body decoded into ``descriptor.response_type``, or None when
            the descriptor has no response type.

        Raises:
            MeilisearchURLError: Host and endpoint do not form a valid URL.
            MeilisearchRequestSerializationError: The payload cannot be
                encoded; nothing was sent.
            MeilisearchConnectionError: The transport failed.
            MeilisearchStatusCodeError: The status code is not accepted.
            MeilisearchResponseDeserializationError: The body does not decode
                into the response type.
        """
        diagnostics = _CallDiagnostics(descriptor)
        outer_call_id = get_call_id()
        set_call_id()
        try:
            value = self._execute(descriptor, diagnostics)
        except MeilisearchRequestError as exc:
            self._notify("request_failed", descriptor, exc)
            raise
        finally:
            if outer_call_id is None:
                clear_call_context()
            else:
                set_call_id(outer_call_id)
        return value

    def _execute(
        self,
        descriptor: RequestDescriptor,
        diagnostics: _CallDiagnostics,
    ) -> Any:  # noqa: ANN401
        url = self._build_url(descriptor, diagnostics)
        content = self._encode_payload(descriptor, diagnostics)

        client = self._ensure_client()
        request = client.build_request(
            str(descriptor.method),
            url,
            content=content,
            headers=self._headers,
        )

        self._notify("request_started", descriptor, str(url))
        started = time.perf_counter()
        try:
            response = client.send(request)
        except httpx.TransportError as exc:
            raise diagnostics.error(
                MeilisearchConnectionError,
                "Request execution failed",
                cause=exc,
            ) from exc
        elapsed_ms = (time.perf_counter() - started) * 1000

        diagnostics.status_code = response.status_code
        self._notify("response_received", descriptor, response.status_code, elapsed_ms)

        self._check_status(descriptor, response, diagnostics)
        value = self._decode_response(descriptor, response, diagnostics)

        self._notify("response_decoded", descriptor, value)
        return value

    def _build_url(
        self,
        descriptor: RequestDescriptor,
        diagnostics: _CallDiagnostics,
    ) -> httpx.URL:
        """Join host and endpoint, then merge the query parameters."""
        raw = self.host + descriptor.endpoint
        try:
            url = httpx.URL(raw)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise diagnostics.error(
                MeilisearchURLError,
                f"Unable to parse url {raw!r}",
                cause=exc,
            ) from exc

        if not url.scheme or not url.host:
            raise diagnostics.error(
                MeilisearchURLError,
                f"Url {raw!r} has no scheme or host",
            )

        if descriptor.query_params:
            url = url.copy_merge_params(dict(descriptor.query_params))
        return url

    def _encode_payload(
        self,
        descriptor: RequestDescriptor,
        diagnostics: _CallDiagnostics,
    ) -> bytes | None:
        if descriptor.payload is None:
            return None
        try:
            content = self.codec.encode(descriptor.payload)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise diagnostics.error(
                MeilisearchRequestSerializationError,
                "Unable to marshal request body",
                cause=exc,
            ) from exc
        diagnostics.request_text = content.decode("utf-8", errors="replace")
        return content

    def _check_status(
        self,
        descriptor: RequestDescriptor,
        response: httpx.Response,
        diagnostics: _CallDiagnostics,
    ) -> None:
        accepted = descriptor.accepted_status_codes
        if not accepted or response.status_code in accepted:
            return

        diagnostics.response_text = response.text or EMPTY_RESPONSE
        server_error = self._parse_server_error(response.content)
        if server_error is not None:
            diagnostics.server_message = server_error.message
            diagnostics.server_error_code = server_error.error_code
        raise diagnostics.error(
            MeilisearchStatusCodeError,
            f"Unaccepted status code {response.status_code}",
        )

    def _parse_server_error(self, body: bytes) -> ServerErrorBody | None:
        """Best-effort extraction of the server's error payload.

        Returns None when the body is empty, not JSON or not an object.
        """
        if not body:
            return None
        with contextlib.suppress(ValidationError):
            return self.codec.decode(body, ServerErrorBody)
        return None

    def _decode_response(
        self,
        descriptor: RequestDescriptor,
        response: httpx.Response,
        diagnostics: _CallDiagnostics,
    ) -> Any:  # noqa: ANN401
        if descriptor.response_type is None:
            return None

        raw_body = response.content
        diagnostics.response_text = response.text or EMPTY_RESPONSE
        try:
            return self.codec.decode(raw_body, descriptor.response_type)
        except ValidationError as exc:
            raise diagnostics.error(
                MeilisearchResponseDeserializationError,
                "Unable to unmarshal response body",
                cause=exc,
            ) from exc

    def _notify(self, event: str, *args: Any) -> None:  # noqa: ANN401
        """Forward an event to the observer, keeping its failures contained."""
        try:
            getattr(self.observer, event)(*args)
        except Exception:  # noqa: BLE001
            self._logger.warning("observer_failed", hook=event, exc_info=True)
