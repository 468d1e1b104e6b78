"""Decode structured error bodies returned by discovered APIs.

Error responses look like::

    {"error": {"code": 404, "message": "Not Found",
               "errors": [{"domain": "global", "reason": "notFound",
                           "message": "Not Found"}]}}

The body is parsed with the package's own JSON reader, so the same
tokenizer rules apply as for discovery documents.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from discovery_client.exceptions import JsonSyntaxError
from discovery_client.json_reader import parse
from discovery_client.models import RequestError, SingleError

logger = logging.getLogger(__name__)


def parse_request_error(content: bytes) -> Optional[RequestError]:
    """Decode a :class:`~discovery_client.models.RequestError` from a response body.

    Args:
        content: Raw response bytes.

    Returns:
        The decoded error, or ``None`` when the body is empty, not JSON, or
        has no ``error`` object.
    """
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return None
    if not text.strip():
        return None

    try:
        tree = parse(text)
    except JsonSyntaxError as exc:
        logger.debug("Error body is not parseable JSON: %s", exc)
        return None

    if not isinstance(tree, dict) or not isinstance(tree.get("error"), dict):
        return None
    error = tree["error"]

    entries = error.get("errors")
    return RequestError(
        code=_as_int(error.get("code")),
        message=str(error.get("message") or ""),
        errors=[_single_error(e) for e in entries if isinstance(e, dict)]
        if isinstance(entries, list)
        else [],
    )


def _single_error(raw: dict[str, Any]) -> SingleError:
    return SingleError(
        domain=_optional_str(raw.get("domain")),
        reason=_optional_str(raw.get("reason")),
        message=_optional_str(raw.get("message")),
        location_type=_optional_str(raw.get("locationType")),
        location=_optional_str(raw.get("location")),
    )


def _as_int(value: Any) -> int:
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return int(value)
    return 0


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
