"""Parameter validation for discovered methods.

Validation is all-or-nothing: one failing parameter fails the whole
request, and the executor then sends nothing. Two rules are checked for
every parameter the method declares:

1. A required parameter must have a non-empty value.
2. A present, non-empty value must match the parameter's ``pattern`` as a
   full-string match (``re.fullmatch``), not a substring search.

Values supplied for names the method does not declare are ignored here.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Any, Mapping, Optional

from discovery_client.exceptions import ValidationFailure
from discovery_client.models import Method, Parameter

logger = logging.getLogger(__name__)


def validate_parameters(method: Method, values: Optional[Mapping[str, Any]]) -> bool:
    """Check every declared parameter of *method* against *values*.

    Args:
        method: The method whose parameter declarations are enforced.
        values: Supplied values keyed by parameter name (strings, ``None``,
            or lists of strings for repeated parameters).

    Returns:
        ``True`` if every parameter passes, ``False`` on the first failure.
    """
    return find_invalid_parameter(method, values) is None


def find_invalid_parameter(
    method: Method, values: Optional[Mapping[str, Any]]
) -> Optional[Parameter]:
    """Return the first declared parameter that fails validation, or ``None``."""
    values = values or {}
    for parameter in method.parameters.values():
        if not validate_parameter(parameter, values):
            return parameter
    return None


def ensure_valid(method: Method, values: Optional[Mapping[str, Any]]) -> None:
    """Raise :class:`ValidationFailure` if *values* do not satisfy *method*."""
    parameter = find_invalid_parameter(method, values)
    if parameter is not None:
        raise ValidationFailure(
            f"Parameter '{parameter.name}' of method '{method.name}' is missing or invalid"
        )


def validate_parameter(parameter: Parameter, values: Mapping[str, Any]) -> bool:
    """Validate one parameter declaration against the supplied values."""
    value = values.get(parameter.name)
    candidates = _non_empty(value)

    if parameter.required and not candidates:
        logger.debug("Required parameter '%s' is missing", parameter.name)
        return False
    return all(validate_pattern(parameter, candidate) for candidate in candidates)


def validate_pattern(parameter: Parameter, value: str) -> bool:
    """Return True if *value* fully matches the parameter's pattern.

    A parameter without a pattern accepts any value. A pattern that does not
    compile rejects every value.
    """
    if parameter.pattern is None:
        return True
    regex = _compile(parameter.pattern)
    if regex is None:
        return False
    if regex.fullmatch(value) is None:
        logger.debug(
            "Value %r for parameter '%s' does not match pattern %r",
            value,
            parameter.name,
            parameter.pattern,
        )
        return False
    return True


def _non_empty(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and str(v) != ""]
    text = str(value)
    return [text] if text else []


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> Optional[re.Pattern[str]]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        logger.warning("Ignoring values for invalid pattern %r: %s", pattern, exc)
        return None
