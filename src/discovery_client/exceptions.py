"""Exception hierarchy for discovery_client.

All exceptions inherit from :class:`DiscoveryClientError` so that callers can
catch every failure raised by the package with a single ``except`` clause.

Subclass hierarchy::

    DiscoveryClientError
    +-- JsonSyntaxError
    +-- DiscoveryDocumentError
    |   +-- MissingRequiredFieldError
    |   +-- InvalidDiscoveryDocumentError
    |   +-- UnknownMethodError
    +-- DocumentLoadError
    +-- UnsupportedParameterTypeError
    +-- UnsupportedHttpMethodError
    +-- ValidationFailure
    +-- TransportError
    +-- SerializationError
    +-- ConfigError

Server-side error responses (non-2xx with a body) are deliberately absent
from this list: the executor hands them back as ordinary responses.
"""

from __future__ import annotations

from typing import Optional


class DiscoveryClientError(Exception):
    """Base exception for all discovery_client errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class JsonSyntaxError(DiscoveryClientError):
    """Raised when the JSON parser meets a token it cannot accept.

    Args:
        message: Description of the problem.
        position: Approximate character offset of the offending token, if
            known.
    """

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position


class DiscoveryDocumentError(DiscoveryClientError):
    """Raised when a discovery document cannot be turned into a service model."""


class MissingRequiredFieldError(DiscoveryDocumentError):
    """Raised when a discovery document lacks a mandatory top-level key.

    Args:
        field: Name of the missing key (``name`` or ``version``).
    """

    def __init__(self, field: str):
        super().__init__(f"Discovery document is missing required field '{field}'")
        self.field = field


class InvalidDiscoveryDocumentError(DiscoveryDocumentError):
    """Raised when a discovery document is structurally inconsistent."""


class UnknownMethodError(DiscoveryDocumentError):
    """Raised when a resource or method lookup on a service fails."""


class DocumentLoadError(DiscoveryClientError):
    """Raised when a discovery document cannot be read from its source."""


class UnsupportedParameterTypeError(DiscoveryClientError):
    """Raised when a parameter declares a location other than ``path`` or ``query``."""


class UnsupportedHttpMethodError(DiscoveryClientError):
    """Raised when a method declares an HTTP verb the executor cannot send."""


class ValidationFailure(DiscoveryClientError):
    """Raised by :func:`~discovery_client.request.validator.ensure_valid`.

    The executor never raises this; it signals a failed validation through
    :attr:`~discovery_client.models.ApiResponse.valid` instead.
    """


class TransportError(DiscoveryClientError):
    """Raised when no HTTP response could be obtained at all (DNS, refused, timeout)."""


class SerializationError(DiscoveryClientError):
    """Raised when a body cannot be converted to or from the requested type."""


class ConfigError(DiscoveryClientError):
    """Raised for configuration problems (unreadable file, invalid values)."""
