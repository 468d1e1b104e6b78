"""Deterministic request URL assembly.

:func:`build_url` combines a service base URI, a method's path template and
the caller's parameter values into the final request URL:

* the query string always starts with ``alt=json`` or ``alt=atom``;
* a developer key, if any, follows as ``key=...`` (see
  :func:`escape_developer_key`);
* supplied values are then processed in name-sorted order so that the same
  input always yields the same URL;
* ``path`` parameters replace their ``{name}`` placeholder, ``query``
  parameters are appended as ``name=value``.

Every supplied value is percent-escaped exactly once, so a value can never
add a query entry or cut the URL short: ``x&key=evil`` is sent as
``x%26key%3Devil``. Callers pass raw values;
:func:`~discovery_client.request.builder.parse_query_string` decodes escaped
input before it gets here.

A ``None`` value falls back to the parameter's default. An empty string does
not: it stays empty, and an empty optional query parameter is left out.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlsplit

from discovery_client.exceptions import UnsupportedParameterTypeError
from discovery_client.models import Method, Parameter, ParameterLocation, Representation

logger = logging.getLogger(__name__)

# RFC 3986 reserved characters left alone by generic URI escaping, minus the
# ones that would break out of a query value (& ? #).
_URI_SAFE_CHARS = "/:@!$'()*+,;="
# Path values use the same set. Query values also escape what delimits a
# query entry (= +).
_QUERY_SAFE_CHARS = "/:@!$'()*,;"
_ABSOLUTE_URL = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def escape_developer_key(key: str) -> str:
    """Percent-escape a developer key for use as a query value.

    Example::

        escape_developer_key("?&^%  ABC123")
        # '%3F%26%5E%25%20%20ABC123'
    """
    return quote(key, safe=_URI_SAFE_CHARS)


def build_url(
    base_uri: str,
    method: Method,
    values: Optional[Mapping[str, Any]],
    developer_key: Optional[str] = None,
    representation: Representation = Representation.JSON,
) -> str:
    """Build the full request URL for a call to *method*.

    Args:
        base_uri: The service base URI (``Service.base_uri``).
        method: The method being called.
        values: Parameter values keyed by name. Lists are emitted as one
            query entry per element.
        developer_key: Optional API key appended as ``key=``.
        representation: Requested response encoding.

    Returns:
        The absolute URL.

    Raises:
        UnsupportedParameterTypeError: If a supplied parameter declares a
            location other than ``path`` or ``query``.
    """
    query = [f"alt={Representation(representation).value}"]
    if developer_key:
        query.append("key=" + escape_developer_key(developer_key))

    rest_path = method.rest_path
    values = values or {}
    for name in sorted(values):
        parameter = method.parameters.get(name)
        if parameter is None:
            logger.debug("Skipping value for undeclared parameter '%s' of '%s'", name, method.name)
            continue

        value = effective_value(parameter, values[name])
        if parameter.location == ParameterLocation.PATH.value:
            rest_path = rest_path.replace("{%s}" % name, _path_text(value))
        elif parameter.location == ParameterLocation.QUERY.value:
            query.extend(_query_entries(parameter, value))
        else:
            raise UnsupportedParameterTypeError(
                f"Found an unsupported parameter type '{parameter.location}' "
                f"for parameter '{name}' of method '{method.name}'"
            )

    return combine_url(base_uri, rest_path) + "?" + "&".join(query)


def effective_value(parameter: Parameter, value: Any) -> Any:
    """Return *value*, or the parameter default when *value* is ``None``."""
    if value is None:
        return parameter.default
    return value


def combine_url(base_uri: str, path: str) -> str:
    """Resolve *path* against *base_uri*.

    Absolute URLs are used as-is, ``/``-rooted paths replace the base path,
    and relative paths are appended to the base URI's directory. An empty
    path component becomes ``/``.
    """
    if _ABSOLUTE_URL.match(path):
        combined = path
    else:
        base = urlsplit(base_uri)
        if path.startswith("/"):
            combined = f"{base.scheme}://{base.netloc}{path}"
        else:
            base_path = base.path or "/"
            directory = base_path[: base_path.rfind("/") + 1]
            combined = f"{base.scheme}://{base.netloc}{directory}{path}"

    parts = urlsplit(combined)
    if not parts.path:
        combined = f"{parts.scheme}://{parts.netloc}/"
    return combined


def _path_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(_escape_path(str(v)) for v in value if v is not None)
    return _escape_path(str(value))


def _query_entries(parameter: Parameter, value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        items = [str(v) for v in value if v is not None and str(v) != ""]
        return [f"{parameter.name}={_escape_query(item)}" for item in items]

    text = "" if value is None else str(value)
    if not parameter.required and text == "":
        return []
    return [f"{parameter.name}={_escape_query(text)}"]


def _escape_path(text: str) -> str:
    return quote(text, safe=_URI_SAFE_CHARS)


def _escape_query(text: str) -> str:
    return quote(text, safe=_QUERY_SAFE_CHARS)
