"""Turn a parsed discovery document into an immutable :class:`~discovery_client.models.Service`.

The builder walks the JSON tree produced by
:func:`~discovery_client.json_reader.parse` and maps it onto the service
model using the field names of one discovery dialect (see
:mod:`~discovery_client.discovery.versions`). The dialect is chosen once,
when the :class:`ModelBuilder` is constructed.

The walk is recursive:

* every key under the top-level ``resources`` map becomes a
  :class:`~discovery_client.models.Resource`;
* a resource's ``methods`` map becomes
  :class:`~discovery_client.models.Method` objects, each with its
  ``parameters`` parsed into :class:`~discovery_client.models.Parameter`
  objects and its ``parameterOrder`` captured;
* a resource's own ``resources`` map is recursed into when the dialect
  allows nesting.

Typical usage::

    from discovery_client.discovery import create_service

    service = create_service(document_text, "1.0")
    method = service.get_method("activities", "count")
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TextIO, Union

from discovery_client.discovery.schemas import resolve_schemas, schema_reference
from discovery_client.discovery.versions import Dialect, get_dialect
from discovery_client.exceptions import (
    InvalidDiscoveryDocumentError,
    MissingRequiredFieldError,
)
from discovery_client.json_reader import parse
from discovery_client.models import (
    DiscoveryVersion,
    FactoryParameters,
    Method,
    Parameter,
    ParameterLocation,
    Resource,
    Service,
)

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("name", "version")


def build_service(
    tree: Any,
    version: Union[DiscoveryVersion, str],
    params: Optional[FactoryParameters] = None,
) -> Service:
    """Build a :class:`Service` from a parsed discovery document.

    Args:
        tree: The document root, as returned by
            :func:`~discovery_client.json_reader.parse`.
        version: Dialect of the document (``"0.3"`` or ``"1.0"``).
        params: Server URL, base-path override and gzip setting. Defaults to
            :class:`FactoryParameters` defaults.

    Returns:
        The immutable service model.

    Raises:
        MissingRequiredFieldError: If ``name`` or ``version`` is absent.
        InvalidDiscoveryDocumentError: If the document is structurally
            inconsistent (for example a path parameter missing from its
            method's path template).
    """
    return ModelBuilder(version, params).build(tree)


def create_service(
    source: Union[str, TextIO],
    version: Union[DiscoveryVersion, str],
    params: Optional[FactoryParameters] = None,
) -> Service:
    """Parse discovery document text and build its :class:`Service`.

    Raises:
        JsonSyntaxError: If the text is not valid JSON.
        MissingRequiredFieldError: If ``name`` or ``version`` is absent.
    """
    return build_service(parse(source), version, params)


class ModelBuilder:
    """Builds service models for one discovery dialect.

    Args:
        version: Dialect of the documents this builder accepts.
        params: Factory parameters applied to every service built.
    """

    def __init__(
        self,
        version: Union[DiscoveryVersion, str],
        params: Optional[FactoryParameters] = None,
    ) -> None:
        self._dialect: Dialect = get_dialect(version)
        self._params = params or FactoryParameters()

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    def build(self, tree: Any) -> Service:
        if not isinstance(tree, dict):
            raise InvalidDiscoveryDocumentError(
                f"Discovery document must be a JSON object (got {type(tree).__name__})"
            )
        for field in _REQUIRED_FIELDS:
            if tree.get(field) is None:
                raise MissingRequiredFieldError(field)

        name = str(tree["name"])
        logger.debug("Building service '%s' with discovery dialect %s", name, self._dialect.version.value)

        schemas = resolve_schemas(tree.get("schemas")) if self._dialect.reads_schemas else {}
        common_parameters = (
            self._build_parameters(tree.get("parameters"), owner=name)
            if self._dialect.reads_common_parameters
            else {}
        )
        features = tree.get("features") or []

        service = Service(
            name=name,
            version=str(tree["version"]),
            description=_optional_str(tree.get("description")),
            base_uri=self._base_uri(tree),
            rpc_path=_optional_str(tree.get("rpcPath")),
            gzip_enabled=self._params.gzip_enabled,
            discovery_version=self._dialect.version,
            features=[str(f) for f in features] if isinstance(features, list) else [],
            resources=self._build_resources(tree.get("resources"), parent=name),
            schemas=schemas,
            parameters=common_parameters,
        )
        self._check_schema_references(service)
        return service

    # ------------------------------------------------------------------ #
    # Resources and methods
    # ------------------------------------------------------------------ #

    def _build_resources(self, raw: Any, parent: str) -> dict[str, Resource]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise InvalidDiscoveryDocumentError(f"'resources' of '{parent}' must be an object")
        return {name: self._build_resource(name, body, parent) for name, body in raw.items()}

    def _build_resource(self, name: str, raw: Any, parent: str) -> Resource:
        if not isinstance(raw, dict):
            raise InvalidDiscoveryDocumentError(f"Resource '{parent}.{name}' must be an object")

        path = f"{parent}.{name}"
        nested: dict[str, Resource] = {}
        if raw.get("resources") is not None:
            if self._dialect.nested_resources:
                nested = self._build_resources(raw["resources"], parent=path)
            else:
                logger.debug(
                    "Ignoring nested resources of '%s': dialect %s is single-level",
                    path,
                    self._dialect.version.value,
                )

        methods_raw = raw.get("methods")
        if methods_raw is not None and not isinstance(methods_raw, dict):
            raise InvalidDiscoveryDocumentError(f"'methods' of resource '{path}' must be an object")
        methods = {
            method_name: self._build_method(method_name, body, path)
            for method_name, body in (methods_raw or {}).items()
        }
        return Resource(name=name, resources=nested, methods=methods)

    def _build_method(self, name: str, raw: Any, resource_path: str) -> Method:
        path = f"{resource_path}.{name}"
        if not isinstance(raw, dict):
            raise InvalidDiscoveryDocumentError(f"Method '{path}' must be an object")

        http_method = raw.get("httpMethod")
        if http_method is None:
            raise InvalidDiscoveryDocumentError(f"Method '{path}' declares no httpMethod")

        parameters = self._build_parameters(raw.get("parameters"), owner=path)
        rest_path = self._dialect.rest_path(raw)
        _check_path_placeholders(path, rest_path, parameters)

        return Method(
            name=name,
            http_method=str(http_method).upper(),
            rest_path=rest_path,
            rpc_name=self._dialect.rpc_name(raw),
            description=_optional_str(raw.get("description")),
            parameter_order=_parameter_order(raw.get("parameterOrder"), parameters, path),
            parameters=parameters,
            request_schema=schema_reference(raw.get("request")),
            response_schema=schema_reference(raw.get("response")),
        )

    # ------------------------------------------------------------------ #
    # Parameters
    # ------------------------------------------------------------------ #

    def _build_parameters(self, raw: Any, owner: str) -> dict[str, Parameter]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise InvalidDiscoveryDocumentError(f"'parameters' of '{owner}' must be an object")
        return {name: self._build_parameter(name, body, owner) for name, body in raw.items()}

    def _build_parameter(self, name: str, raw: Any, owner: str) -> Parameter:
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise InvalidDiscoveryDocumentError(f"Parameter '{name}' of '{owner}' must be an object")

        enum_raw = raw.get("enum")
        return Parameter(
            name=name,
            type=_optional_str(raw.get("type")) or "string",
            location=self._dialect.parameter_location(raw, name),
            required=_as_bool(raw.get("required")),
            default=_scalar_str(raw.get("default")),
            pattern=_optional_str(raw.get("pattern")),
            repeated=_as_bool(raw.get("repeated")),
            description=_optional_str(raw.get("description")),
            enum_values=[str(v) for v in enum_raw] if isinstance(enum_raw, list) else None,
            minimum=_scalar_str(raw.get("minimum")),
            maximum=_scalar_str(raw.get("maximum")),
        )

    # ------------------------------------------------------------------ #
    # Service-level helpers
    # ------------------------------------------------------------------ #

    def _base_uri(self, tree: dict[str, Any]) -> str:
        base_path = self._params.base_path or self._dialect.base_path(tree) or "/"
        if not base_path.startswith("/"):
            base_path = "/" + base_path
        return self._params.server_url.rstrip("/") + base_path

    def _check_schema_references(self, service: Service) -> None:
        if not service.schemas:
            return
        for resource_path, method in service.iter_methods():
            for ref in (method.request_schema, method.response_schema):
                if ref is not None and ref not in service.schemas:
                    logger.warning(
                        "Method '%s.%s' references unknown schema '%s'",
                        resource_path,
                        method.name,
                        ref,
                    )


def _check_path_placeholders(path: str, rest_path: str, parameters: dict[str, Parameter]) -> None:
    for parameter in parameters.values():
        if parameter.location != ParameterLocation.PATH.value:
            continue
        count = rest_path.count("{%s}" % parameter.name)
        if count != 1:
            raise InvalidDiscoveryDocumentError(
                f"Path parameter '{parameter.name}' of method '{path}' must appear exactly "
                f"once in '{rest_path}' (found {count})"
            )


def _parameter_order(raw: Any, parameters: dict[str, Parameter], path: str) -> list[str]:
    if not isinstance(raw, list):
        return []
    order = [str(name) for name in raw]
    for name in order:
        if name not in parameters:
            logger.warning("parameterOrder of '%s' names undeclared parameter '%s'", path, name)
    return order


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() == "true"
    return value is True


def _scalar_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
