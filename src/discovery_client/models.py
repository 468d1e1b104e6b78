"""Canonical Pydantic models shared across all discovery_client modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Service model** -- built once from a discovery document and never mutated:
    :class:`Parameter`, :class:`Method`, :class:`Resource`, :class:`Schema`
    and :class:`Service`.

**Per-call models** -- produced for every API call:
    :class:`RequestSpec` and :class:`ApiResponse`.

**Error payloads** -- decoded from server error bodies:
    :class:`SingleError` and :class:`RequestError`.

Service-model classes are frozen; assigning to a field raises a pydantic
``ValidationError``. Freezing is shallow: the ``dict`` and ``list`` fields
are ordinary containers shared with every holder of the model, so treat them
as read-only and use ``model_copy(update=...)`` to derive a changed model.
"""

from __future__ import annotations

import enum
import io
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from discovery_client.auth.base import Authenticator, NullAuthenticator
from discovery_client.exceptions import UnknownMethodError

DEFAULT_SERVER_URL = "https://www.googleapis.com"
DEFAULT_APP_NAME = "Unknown Application"


# --- Enumerations ---


class DiscoveryVersion(str, enum.Enum):
    """Discovery document dialects understood by the model builder."""

    V0_3 = "0.3"
    V1_0 = "1.0"


class HttpMethod(str, enum.Enum):
    """HTTP verbs a discovered method may declare."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @property
    def allows_body(self) -> bool:
        """Whether a request body is written for this verb."""
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class ParameterLocation(str, enum.Enum):
    """Where a parameter value ends up in the request URL."""

    PATH = "path"
    QUERY = "query"


class Representation(str, enum.Enum):
    """Response encoding requested through the ``alt`` query parameter."""

    JSON = "json"
    ATOM = "atom"

    @property
    def mime_type(self) -> str:
        if self is Representation.ATOM:
            return "application/atom+xml"
        return "application/json"


class SchemaType(str, enum.Enum):
    """JSON types a discovery schema may declare.

    ``ANY`` doubles as the untyped placeholder used when a document declares
    a type the builder does not understand.
    """

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ANY = "any"


# --- Service model ---


class _FrozenModel(BaseModel):
    """Base for immutable models. Only field assignment is blocked."""

    model_config = ConfigDict(frozen=True)


class Parameter(_FrozenModel):
    """A single parameter declared on a discovered method.

    ``location`` is kept as the raw string from the document. Values other
    than ``path`` and ``query`` are accepted here and rejected when a URL is
    built, so a document with one odd parameter can still be loaded.
    """

    name: str
    type: str = Field(default="string", description="Declared JSON type")
    location: str = Field(default=ParameterLocation.QUERY.value)
    required: bool = False
    default: Optional[str] = None
    pattern: Optional[str] = Field(
        default=None, description="Regex the whole value must match"
    )
    repeated: bool = False
    description: Optional[str] = None
    enum_values: Optional[list[str]] = None
    minimum: Optional[str] = None
    maximum: Optional[str] = None


class Method(_FrozenModel):
    """One callable API operation."""

    name: str
    http_method: str = Field(description="HTTP verb as declared, upper-cased")
    rest_path: str = Field(description="Path template with {name} placeholders")
    rpc_name: Optional[str] = None
    description: Optional[str] = None
    parameter_order: list[str] = Field(default_factory=list)
    parameters: dict[str, Parameter] = Field(default_factory=dict)
    request_schema: Optional[str] = None
    response_schema: Optional[str] = None

    @property
    def required_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters.values() if p.required]


class Resource(_FrozenModel):
    """A named group of methods and, in the 1.0 dialect, nested resources."""

    name: str
    resources: dict[str, Resource] = Field(default_factory=dict)
    methods: dict[str, Method] = Field(default_factory=dict)

    def iter_methods(self, prefix: str = ""):
        """Yield ``(dotted_resource_path, method)`` pairs for this subtree."""
        path = f"{prefix}.{self.name}" if prefix else self.name
        for method in self.methods.values():
            yield path, method
        for child in self.resources.values():
            yield from child.iter_methods(path)


class Schema(_FrozenModel):
    """A request or response body schema from the ``schemas`` map."""

    id: Optional[str] = None
    type: SchemaType = SchemaType.ANY
    description: Optional[str] = None
    ref: Optional[str] = Field(default=None, description="Referenced schema id")
    properties: dict[str, Schema] = Field(default_factory=dict)
    items: Optional[Schema] = None
    additional_properties: Optional[Schema] = None


class FactoryParameters(_FrozenModel):
    """Caller-supplied settings applied while building a :class:`Service`."""

    server_url: str = DEFAULT_SERVER_URL
    base_path: Optional[str] = Field(
        default=None, description="Overrides the document's base path"
    )
    gzip_enabled: bool = True


class Service(_FrozenModel):
    """Root of the model built from one discovery document.

    See Also:
        :func:`~discovery_client.discovery.builder.build_service`
    """

    name: str
    version: str
    description: Optional[str] = None
    base_uri: str
    rpc_path: Optional[str] = None
    gzip_enabled: bool = True
    discovery_version: DiscoveryVersion
    features: list[str] = Field(default_factory=list)
    resources: dict[str, Resource] = Field(default_factory=dict)
    schemas: dict[str, Schema] = Field(default_factory=dict)
    parameters: dict[str, Parameter] = Field(
        default_factory=dict, description="Service-wide common parameters"
    )

    def get_resource(self, path: str) -> Resource:
        """Return the resource at a dotted path such as ``"mgmt.adunits"``.

        Raises:
            UnknownMethodError: If any segment of *path* does not exist.
        """
        head, *rest = path.split(".")
        resource = self.resources.get(head)
        for segment in rest:
            if resource is None:
                break
            resource = resource.resources.get(segment)
        if resource is None:
            raise UnknownMethodError(
                f"Service '{self.name}' has no resource '{path}'"
            )
        return resource

    def get_method(self, resource_path: str, method_name: str) -> Method:
        """Return a method by resource path and method name.

        Raises:
            UnknownMethodError: If the resource or the method does not exist.
        """
        resource = self.get_resource(resource_path)
        method = resource.methods.get(method_name)
        if method is None:
            available = ", ".join(sorted(resource.methods)) or "(none)"
            raise UnknownMethodError(
                f"Resource '{resource_path}' has no method '{method_name}'. "
                f"Available methods: {available}"
            )
        return method

    def get_schema(self, schema_id: str) -> Optional[Schema]:
        return self.schemas.get(schema_id)

    def iter_methods(self):
        """Yield ``(dotted_resource_path, method)`` for every method of the service."""
        for resource in self.resources.values():
            yield from resource.iter_methods()


# --- Per-call models ---


class RequestSpec(_FrozenModel):
    """Everything needed to send one API call.

    Produced by :func:`~discovery_client.request.builder.build_request` and
    consumed once by
    :meth:`~discovery_client.request.executor.RequestExecutor.execute`.
    A spec is not meant to be shared between concurrent callers.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    service: Service
    method: Method
    http_method: HttpMethod
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Parameter values as strings, None, or lists of strings",
    )
    developer_key: Optional[str] = None
    body: Optional[str] = None
    representation: Representation = Representation.JSON
    app_name: str = DEFAULT_APP_NAME
    authenticator: Authenticator = Field(default_factory=NullAuthenticator)

    @property
    def supports_retry(self) -> bool:
        """Whether an external retry policy may resend this request."""
        return True


class SingleError(BaseModel):
    """One entry of the ``errors`` list in a structured error body."""

    domain: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None
    location_type: Optional[str] = None
    location: Optional[str] = None


class RequestError(BaseModel):
    """Structured error payload returned by the server on a failed call.

    Decoded by :func:`~discovery_client.request.errors.parse_request_error`.
    """

    code: int = 0
    message: str = ""
    errors: list[SingleError] = Field(default_factory=list)


class ApiResponse(BaseModel):
    """Outcome of executing a :class:`RequestSpec`.

    ``valid`` is ``False`` when parameter validation failed and no request
    was sent; in that case ``status_code`` is ``None`` and ``content`` is
    empty.
    """

    status_code: Optional[int] = None
    headers: dict[str, str] = Field(default_factory=dict)
    content: bytes = b""
    valid: bool = True
    error: Optional[RequestError] = None

    @classmethod
    def invalid(cls) -> ApiResponse:
        return cls(valid=False)

    @property
    def is_error(self) -> bool:
        return not self.valid or self.status_code is None or self.status_code >= 400

    def stream(self) -> io.BytesIO:
        """Return a fresh readable stream over the response body."""
        return io.BytesIO(self.content)
