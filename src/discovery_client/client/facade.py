"""Service-bound client that turns ``(resource, method, ...)`` into a response.

:class:`DiscoveryClient` holds a built :class:`~discovery_client.models.Service`
together with the per-client settings (developer key, application name,
authenticator, representation) and delegates the actual call to a
:class:`~discovery_client.request.executor.RequestExecutor`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from discovery_client.auth.base import Authenticator, NullAuthenticator
from discovery_client.config import ClientConfig
from discovery_client.models import ApiResponse, Representation, RequestSpec, Service
from discovery_client.request.builder import build_request
from discovery_client.request.executor import RequestExecutor

logger = logging.getLogger(__name__)

Parameters = Union[Mapping[str, Any], str, None]


class DiscoveryClient:
    """Execute methods of one discovered service.

    Args:
        service: The service model, typically from
            :func:`~discovery_client.discovery.loader.load_service`.
        executor: Executor used to send requests. One is created from
            *config* when omitted.
        config: Client settings. Supplies the defaults for
            *developer_key*, *app_name* and *representation*.
        developer_key: API key appended as ``key=`` to every URL.
        app_name: Application name reported in the ``User-Agent`` header.
        authenticator: Credentials strategy applied to every request.
        representation: Response encoding requested with ``alt=``.

    Example::

        client = DiscoveryClient(service, developer_key="abc")
        response = client.execute_request("activities", "list", parameters={"userId": "@me"})
    """

    def __init__(
        self,
        service: Service,
        executor: Optional[RequestExecutor] = None,
        *,
        config: Optional[ClientConfig] = None,
        developer_key: Optional[str] = None,
        app_name: Optional[str] = None,
        authenticator: Optional[Authenticator] = None,
        representation: Optional[Representation] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._service = service
        self._executor = executor or RequestExecutor(self._config)
        self._developer_key = developer_key or self._config.developer_key
        self._app_name = app_name or self._config.app_name
        self._authenticator = authenticator or NullAuthenticator()
        self._representation = representation or self._config.representation

    @property
    def service(self) -> Service:
        return self._service

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    def create_request(
        self,
        resource: str,
        method: str,
        parameters: Parameters = None,
        body: Optional[str] = None,
    ) -> RequestSpec:
        """Look up *resource*.*method* and build its request spec.

        Args:
            resource: Dotted resource path, e.g. ``"mgmt.adunits"``.
            method: Method name within that resource.
            parameters: Values as a mapping or a query string.
            body: Request body text.

        Raises:
            UnknownMethodError: If the resource or method is not declared.
            UnsupportedHttpMethodError: If the method declares an unknown verb.
        """
        api_method = self._service.get_method(resource, method)
        return build_request(
            self._service,
            api_method,
            parameters,
            body=body,
            developer_key=self._developer_key,
            representation=self._representation,
            authenticator=self._authenticator,
            app_name=self._app_name,
        )

    def execute_request(
        self,
        resource: str,
        method: str,
        body: Optional[str] = None,
        parameters: Parameters = None,
    ) -> ApiResponse:
        """Build and send one call, returning the server's response.

        Validation failures come back as an invalid :class:`ApiResponse`
        and HTTP error statuses as a response carrying ``error``; neither is
        raised.

        Raises:
            UnknownMethodError: If the resource or method is not declared.
            TransportError: If the request could not be delivered.
        """
        spec = self.create_request(resource, method, parameters, body)
        logger.debug("Executing %s.%s on %s", resource, method, self._service.name)
        return self._executor.execute(spec)
