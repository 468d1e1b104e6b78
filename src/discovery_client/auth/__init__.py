"""Authentication seams for outgoing requests.

Exports:
    :class:`~discovery_client.auth.base.Authenticator` -- ABC every strategy extends.
    :class:`~discovery_client.auth.base.ErrorResponseHandler` -- optional error hook mixin.
    :class:`~discovery_client.auth.base.NullAuthenticator` -- no credentials.
"""

from discovery_client.auth.base import (
    Authenticator,
    ErrorResponseHandler,
    NullAuthenticator,
    get_error_response_handlers,
)

__all__ = [
    "Authenticator",
    "ErrorResponseHandler",
    "NullAuthenticator",
    "get_error_response_handlers",
]
