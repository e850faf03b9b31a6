"""JSON encoding and decoding of request and response bodies."""

from __future__ import annotations

import threading
from typing import Any

from pydantic import BaseModel, TypeAdapter


__all__ = ["JsonCodec"]


class JsonCodec:
    """Encode payloads to JSON bytes and decode JSON bytes into typed values.

    Encoding is resolved from the payload's runtime type, decoding from the
    target type handed in by the caller. Any type pydantic can validate is a
    valid target: models, ``list[Index]``, ``dict[str, Any]``, ``str | None``.

    Each codec owns a cache of ``TypeAdapter`` instances. A dispatcher creates
    its own codec, so the cache lives exactly as long as the dispatcher does.
    Encoded payloads use the models' camelCase aliases; top-level models
    leave out fields that are None, other values are encoded as given.

    ``bytes`` payloads are taken to be pre-encoded JSON and are sent as is.
    """

    def __init__(self) -> None:
        """Initialize an empty adapter cache."""
        self._adapters: dict[Any, TypeAdapter[Any]] = {}
        self._lock = threading.Lock()

    def adapter(self, target: Any) -> TypeAdapter[Any]:  # noqa: ANN401
        """Return the (cached) TypeAdapter for a type or annotation.

        Args:
            target: Type or annotation to adapt.

        Returns:
            The adapter for ``target``.
        """
        try:
            with self._lock:
                cached = self._adapters.get(target)
        except TypeError:
            # Unhashable annotation, build an adapter for this call only
            return TypeAdapter(target)
        if cached is not None:
            return cached

        adapter: TypeAdapter[Any] = TypeAdapter(target)
        with self._lock:
            return self._adapters.setdefault(target, adapter)

    def encode(self, value: Any) -> bytes:  # noqa: ANN401
        """Encode a payload to JSON.

        Args:
            value: The payload.

        Returns:
            The JSON document as bytes.

        Raises:
            pydantic_core.PydanticSerializationError: If the value holds
                something that has no JSON representation.
        """
        if isinstance(value, bytes | bytearray):
            return bytes(value)
        if isinstance(value, BaseModel):
            return value.model_dump_json(by_alias=True, exclude_none=True).encode()
        return self.adapter(type(value)).dump_json(value, by_alias=True)

    def decode[T](self, data: bytes | str, target: type[T]) -> T:
        """Decode a JSON document into ``target``.

        Args:
            data: The raw JSON document.
            target: Type or annotation to decode into.

        Returns:
            The decoded value.

        Raises:
            pydantic.ValidationError: If the document is not valid JSON or
                does not match ``target``.
        """
        decoded: T = self.adapter(target).validate_json(data)
        return decoded
