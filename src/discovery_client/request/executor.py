"""Send a :class:`~discovery_client.models.RequestSpec` over HTTP.

:class:`RequestExecutor` wraps :class:`httpx.Client` and performs the
stateful half of an API call:

1. **Validation** -- a spec whose parameters fail validation is not sent;
   :meth:`~RequestExecutor.execute` returns
   :meth:`ApiResponse.invalid() <discovery_client.models.ApiResponse.invalid>`.
2. **Request construction** -- URL from
   :func:`~discovery_client.request.url.build_url`, ``Content-Type`` from the
   representation, a ``User-Agent`` identifying the client, and gzip
   handling when the service enables it.
3. **Auth injection** -- the request's authenticator gets the finished
   :class:`httpx.Request` last, so it sees every header and the body.
4. **Dispatch** -- transport failures raise
   :class:`~discovery_client.exceptions.TransportError`. Any HTTP response,
   including 4xx/5xx, comes back as an :class:`ApiResponse`; for error
   statuses the authenticator may react first through the
   :class:`~discovery_client.auth.base.ErrorResponseHandler` hooks.

There is no retry: :attr:`RequestSpec.supports_retry` only tells an
external policy that resending is allowed.
"""

from __future__ import annotations

import contextlib
import gzip
import logging
import platform
from typing import Iterator, Optional

import httpx

from discovery_client import __version__
from discovery_client.auth.base import get_error_response_handlers
from discovery_client.config import ClientConfig
from discovery_client.exceptions import TransportError
from discovery_client.models import ApiResponse, RequestError, RequestSpec
from discovery_client.request.builder import request_url
from discovery_client.request.errors import parse_request_error
from discovery_client.request.validator import find_invalid_parameter

logger = logging.getLogger(__name__)

CLIENT_NAME = "discovery-client"
GZIP_USER_AGENT_SUFFIX = " (gzip)"
GZIP_ENCODING = "gzip"


def format_for_user_agent(text: str) -> str:
    """Make *text* safe for a ``User-Agent`` product token (spaces become ``_``)."""
    return text.replace(" ", "_")


def user_agent(app_name: str, gzip_enabled: bool) -> str:
    """Build the ``User-Agent`` header value.

    Example::

        user_agent("My App", True)
        # 'My_App discovery-client/0.1.0 Linux/6.1.0 (gzip)'
    """
    agent = "{} {}/{} {}/{}".format(
        format_for_user_agent(app_name),
        CLIENT_NAME,
        __version__,
        format_for_user_agent(platform.system() or "unknown"),
        format_for_user_agent(platform.release() or "unknown"),
    )
    if gzip_enabled:
        agent += GZIP_USER_AGENT_SUFFIX
    return agent


class RequestExecutor:
    """Synchronous executor for request specs.

    Best used as a context manager so the underlying :class:`httpx.Client`
    is reused across calls and closed afterwards. Outside a ``with`` block
    each :meth:`execute` call opens and closes its own client.

    Args:
        config: Transport settings (timeout, SSL verification, redirects).
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        with RequestExecutor(config) as executor:
            response = executor.execute(spec)
            payload = response.stream().read()
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> RequestExecutor:
        self._client = self._create_client()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def execute(self, spec: RequestSpec) -> ApiResponse:
        """Validate, send and collect the response for *spec*.

        Returns:
            The response. ``valid`` is ``False`` (and nothing was sent) when
            parameter validation failed. Error statuses are returned, not
            raised.

        Raises:
            TransportError: If no response could be obtained.
            UnsupportedParameterTypeError: If a parameter declares an
                unknown location.
        """
        invalid = find_invalid_parameter(spec.method, spec.parameters)
        if invalid is not None:
            logger.warning(
                "Not sending %s: parameter '%s' is missing or invalid",
                spec.method.name,
                invalid.name,
            )
            return ApiResponse.invalid()

        request = self.create_http_request(spec)
        logger.debug("%s %s", request.method, request.url)

        with self._borrow_client() as client:
            try:
                response = client.send(request)
            except httpx.RequestError as exc:
                raise TransportError(
                    f"{request.method} {request.url} failed: {exc}"
                ) from exc

        error: Optional[RequestError] = None
        if response.is_error:
            error = parse_request_error(response.content) or RequestError(
                code=response.status_code, message=response.reason_phrase or ""
            )
            logger.debug("Server returned HTTP %d for %s", response.status_code, spec.method.name)
            self._run_error_handlers(spec, request, error)

        return ApiResponse(
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            content=response.content,
            error=error,
        )

    def create_http_request(self, spec: RequestSpec) -> httpx.Request:
        """Build the outgoing :class:`httpx.Request` for *spec* without sending it."""
        gzip_enabled = spec.service.gzip_enabled
        headers = {
            "Content-Type": spec.representation.mime_type,
            "User-Agent": user_agent(spec.app_name, gzip_enabled),
            # httpx decodes gzip/deflate bodies whenever it advertised them.
            "Accept-Encoding": "gzip, deflate" if gzip_enabled else "identity",
        }

        content: Optional[bytes] = None
        if spec.http_method.allows_body and spec.body:
            content = spec.body.encode("utf-8")
            if gzip_enabled:
                content = gzip.compress(content)
                headers["Content-Encoding"] = GZIP_ENCODING

        request = httpx.Request(
            spec.http_method.value,
            request_url(spec),
            headers=headers,
            content=content,
        )
        spec.authenticator.apply_to_request(request)
        return request

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _create_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=self._config.follow_redirects,
            transport=self._transport,
        )

    @contextlib.contextmanager
    def _borrow_client(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
            return
        client = self._create_client()
        try:
            yield client
        finally:
            client.close()

    def _run_error_handlers(
        self, spec: RequestSpec, request: httpx.Request, error: RequestError
    ) -> None:
        for handler in get_error_response_handlers(spec.authenticator):
            if not handler.can_handle_error_response(error):
                continue
            handler.prepare_handle_error_response(error)
            handler.handle_error_response(error, request)
