"""Authenticator contract consumed by the request executor.

This module defines the seams through which credentials reach outgoing
requests:

- :class:`Authenticator` -- the abstract base class every authentication
  strategy extends. The executor calls :meth:`~Authenticator.apply_to_request`
  on each outgoing :class:`httpx.Request` just before it is sent.
- :class:`ErrorResponseHandler` -- an optional mixin for authenticators that
  want a chance to react to structured error responses (for example, to
  refresh an expired token before the caller retries).
- :class:`NullAuthenticator` -- the default, which leaves requests untouched.

Concrete protocols (OAuth2, API keys in headers, ...) live outside this
package and only need to subclass :class:`Authenticator`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from discovery_client.models import RequestError


class Authenticator(ABC):
    """Abstract base class for authentication strategies."""

    @abstractmethod
    def apply_to_request(self, request: httpx.Request) -> None:
        """Attach credentials to *request* in place.

        Args:
            request: The fully built outgoing request. Implementations
                typically set an ``Authorization`` header.
        """
        ...


class ErrorResponseHandler(ABC):
    """Mixin for authenticators that react to structured error responses.

    When the server answers with an error status, the executor asks every
    handler attached to the request whether it can handle the decoded
    :class:`~discovery_client.models.RequestError`. Handlers that accept
    are given a preparation call followed by the actual handling call.
    Neither call changes what the executor returns to its caller.
    """

    @abstractmethod
    def can_handle_error_response(self, error: RequestError) -> bool:
        ...

    def prepare_handle_error_response(self, error: RequestError) -> None:
        """Hook invoked before :meth:`handle_error_response`. No-op by default."""

    @abstractmethod
    def handle_error_response(self, error: RequestError, request: httpx.Request) -> None:
        ...


class NullAuthenticator(Authenticator):
    """Authenticator that sends requests without credentials."""

    def apply_to_request(self, request: httpx.Request) -> None:
        return None


def get_error_response_handlers(authenticator: Authenticator) -> list[ErrorResponseHandler]:
    """Return the error handlers contributed by *authenticator*.

    Args:
        authenticator: The authenticator attached to a request.

    Returns:
        A list holding *authenticator* when it also implements
        :class:`ErrorResponseHandler`, otherwise an empty list.
    """
    if isinstance(authenticator, ErrorResponseHandler):
        return [authenticator]
    return []
