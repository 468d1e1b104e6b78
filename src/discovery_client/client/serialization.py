"""Typed request/response bodies on top of :class:`DiscoveryClient`.

A :class:`Serializer` converts between Python objects and body text.
:class:`JsonSerializer`, the default, uses pydantic so that responses can be
decoded straight into models::

    client = SchemaAwareClient(service)
    response = client.execute_request_object("activities", "insert", activity)
    created = client.decode(response, Activity)
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError

from discovery_client.client.facade import DiscoveryClient, Parameters
from discovery_client.exceptions import SerializationError
from discovery_client.models import ApiResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class Serializer(Protocol):
    """Converts request objects to text and response text to objects."""

    def object_to_text(self, obj: Any) -> str: ...

    def text_to_object(self, text: str, target: type[T]) -> T: ...


class JsonSerializer:
    """JSON serializer backed by pydantic :class:`~pydantic.TypeAdapter`.

    Pydantic models are dumped by alias so that camelCase API field names
    survive the round trip. ``None`` fields are left out of request bodies.
    """

    def object_to_text(self, obj: Any) -> str:
        if isinstance(obj, BaseModel):
            return obj.model_dump_json(by_alias=True, exclude_none=True)
        return TypeAdapter(type(obj)).dump_json(obj, exclude_none=True).decode("utf-8")

    def text_to_object(self, text: str, target: type[T]) -> T:
        try:
            return TypeAdapter(target).validate_json(text)
        except ValidationError as exc:
            raise SerializationError(
                f"Response body does not match {getattr(target, '__name__', target)}: {exc}"
            ) from exc


class SchemaAwareClient(DiscoveryClient):
    """A :class:`DiscoveryClient` that accepts and returns Python objects.

    Args:
        serializer: Body serializer; defaults to :class:`JsonSerializer`.
        *args, **kwargs: Passed to :class:`DiscoveryClient`.
    """

    def __init__(self, *args: Any, serializer: Optional[Serializer] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._serializer: Serializer = serializer or JsonSerializer()

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    def execute_request_object(
        self,
        resource: str,
        method: str,
        obj: Any = None,
        parameters: Parameters = None,
    ) -> ApiResponse:
        """Serialize *obj* as the body and execute *resource*.*method*."""
        body = None if obj is None else self._serializer.object_to_text(obj)
        return self.execute_request(resource, method, body=body, parameters=parameters)

    def decode(self, response: ApiResponse, target: type[T]) -> T:
        """Decode a response body into *target*.

        Raises:
            SerializationError: If the response is invalid, empty, or does not
                match *target*.
        """
        if not response.valid:
            raise SerializationError("Cannot decode a response that was never sent")
        if not response.content:
            raise SerializationError("Response body is empty")
        text = response.content.decode("utf-8")
        logger.debug("Decoding %d bytes into %s", len(text), getattr(target, "__name__", target))
        return self._serializer.text_to_object(text, target)
