"""Per-call request construction, validation and execution.

Typical usage::

    from discovery_client.request import RequestExecutor, build_request

    spec = build_request(service, method, {"userId": "@me"}, developer_key=key)
    with RequestExecutor() as executor:
        response = executor.execute(spec)

Sub-modules:

* :mod:`~discovery_client.request.builder` -- pure :class:`RequestSpec` construction.
* :mod:`~discovery_client.request.validator` -- required/pattern checks.
* :mod:`~discovery_client.request.url` -- deterministic URL assembly.
* :mod:`~discovery_client.request.executor` -- the httpx-backed sender.
* :mod:`~discovery_client.request.errors` -- structured error body decoding.
"""

from discovery_client.request.builder import (
    build_request,
    coerce_parameters,
    parse_query_string,
    request_url,
    resolve_http_method,
)
from discovery_client.request.errors import parse_request_error
from discovery_client.request.executor import RequestExecutor, format_for_user_agent, user_agent
from discovery_client.request.url import build_url, escape_developer_key
from discovery_client.request.validator import ensure_valid, validate_parameters

__all__ = [
    "RequestExecutor",
    "build_request",
    "build_url",
    "coerce_parameters",
    "ensure_valid",
    "escape_developer_key",
    "format_for_user_agent",
    "parse_query_string",
    "parse_request_error",
    "request_url",
    "resolve_http_method",
    "user_agent",
    "validate_parameters",
]
