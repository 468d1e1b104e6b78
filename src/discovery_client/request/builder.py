"""Pure construction of :class:`~discovery_client.models.RequestSpec` values.

Nothing in this module performs I/O. :func:`build_request` gathers a
service, one of its methods and the caller's inputs into an immutable spec
that :class:`~discovery_client.request.executor.RequestExecutor` later sends.

Parameter values may be given either as a mapping of arbitrary Python
values (coerced by :func:`coerce_parameters`) or as a query string
(split by :func:`parse_query_string`).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional, Union
from urllib.parse import unquote

from discovery_client.auth.base import Authenticator, NullAuthenticator
from discovery_client.exceptions import UnsupportedHttpMethodError
from discovery_client.models import (
    DEFAULT_APP_NAME,
    HttpMethod,
    Method,
    Representation,
    RequestSpec,
    Service,
)
from discovery_client.request.url import build_url

ParameterInput = Union[Mapping[str, Any], str, None]


def build_request(
    service: Service,
    method: Method,
    parameters: ParameterInput = None,
    *,
    body: Optional[str] = None,
    developer_key: Optional[str] = None,
    representation: Representation = Representation.JSON,
    authenticator: Optional[Authenticator] = None,
    app_name: str = DEFAULT_APP_NAME,
) -> RequestSpec:
    """Assemble a :class:`RequestSpec` for one call.

    Args:
        service: The service the method belongs to.
        method: The method to call.
        parameters: Parameter values as a mapping or a query string.
        body: Request body text; only sent for verbs that carry a body.
        developer_key: Optional API key.
        representation: Requested response encoding.
        authenticator: Credentials strategy; defaults to
            :class:`~discovery_client.auth.base.NullAuthenticator`.
        app_name: Application name reported in the ``User-Agent`` header.

    Returns:
        The immutable request spec.

    Raises:
        UnsupportedHttpMethodError: If the method declares an unknown verb.
    """
    if isinstance(parameters, str):
        values: dict[str, Any] = parse_query_string(parameters)
    else:
        values = coerce_parameters(parameters)

    return RequestSpec(
        service=service,
        method=method,
        http_method=resolve_http_method(method),
        parameters=values,
        developer_key=developer_key,
        body=body,
        representation=Representation(representation),
        authenticator=authenticator or NullAuthenticator(),
        app_name=app_name,
    )


def resolve_http_method(method: Method) -> HttpMethod:
    """Map a method's declared verb onto :class:`HttpMethod`.

    Raises:
        UnsupportedHttpMethodError: For verbs other than GET, POST, PUT,
            DELETE and PATCH.
    """
    try:
        return HttpMethod(method.http_method.upper())
    except ValueError:
        raise UnsupportedHttpMethodError(
            f"Unknown HTTP method '{method.http_method}' on method '{method.name}'"
        ) from None


def request_url(spec: RequestSpec) -> str:
    """Return the URL *spec* would be sent to."""
    return build_url(
        spec.service.base_uri,
        spec.method,
        spec.parameters,
        developer_key=spec.developer_key,
        representation=spec.representation,
    )


def coerce_parameters(values: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Convert arbitrary parameter values to strings.

    ``None`` stays ``None`` (so that defaults apply), booleans become
    ``"true"``/``"false"``, lists and tuples become lists of strings, and
    everything else goes through ``str()``.
    """
    if not values:
        return {}
    return {name: _coerce(value) for name, value in values.items()}


def parse_query_string(query: str) -> dict[str, Any]:
    """Split ``a=1&b=2`` into a parameter mapping.

    Values are percent-decoded (``a%20b`` becomes ``a b``);
    :func:`~discovery_client.request.url.build_url` escapes them again. A
    name given more than once collects its values into a list. A leading
    ``?`` is ignored.
    """
    result: dict[str, Any] = {}
    for pair in query.lstrip("?").split("&"):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        value = unquote(value)
        if name in result:
            existing = result[name]
            result[name] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            result[name] = value
    return result


def _coerce(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_coerce(v) for v in value if v is not None]
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)
