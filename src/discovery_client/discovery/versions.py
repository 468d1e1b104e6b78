"""Per-dialect field mapping for discovery documents.

Two discovery dialects exist and they disagree on field names and defaults:

============================ ================= =====================
Concern                      0.3               1.0
============================ ================= =====================
Base path                    ``basePath``      ``restBasePath``
Method path template         ``pathUrl``       ``restPath``
RPC method name              ``rpcName``       ``rpcMethod``
Parameter location           ``parameterType`` ``restParameterType``
Missing location             ``query``         ``query`` (warned)
Nested ``resources``         ignored           recursed
``schemas`` / common params  ignored           read
============================ ================= =====================

Each dialect is a frozen :class:`Dialect` holding the field names plus pure
functions; :data:`DIALECTS` maps a :class:`~discovery_client.models.DiscoveryVersion`
to its entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from discovery_client.models import DiscoveryVersion, ParameterLocation

logger = logging.getLogger(__name__)


def _location_implicit(raw: dict[str, Any], name: str) -> str:
    value = raw.get("parameterType")
    if value is None:
        return ParameterLocation.QUERY.value
    return str(value)


def _location_explicit(raw: dict[str, Any], name: str) -> str:
    value = raw.get("restParameterType")
    if value is None:
        logger.warning(
            "Parameter '%s' declares no restParameterType, assuming 'query'", name
        )
        return ParameterLocation.QUERY.value
    return str(value)


@dataclass(frozen=True)
class Dialect:
    """Field names and defaulting rules for one discovery dialect.

    Attributes:
        version: The dialect this entry describes.
        base_path_key: Top-level key holding the service base path.
        rest_path_key: Method key holding the path template.
        rpc_name_key: Method key holding the RPC name.
        nested_resources: Whether resources may contain ``resources``.
        reads_schemas: Whether the top-level ``schemas`` map is honoured.
        reads_common_parameters: Whether top-level ``parameters`` are read.
        parameter_location: Pure function ``(raw_parameter, name) -> location``.
    """

    version: DiscoveryVersion
    base_path_key: str
    rest_path_key: str
    rpc_name_key: str
    nested_resources: bool
    reads_schemas: bool
    reads_common_parameters: bool
    parameter_location: Callable[[dict[str, Any], str], str]

    def base_path(self, document: dict[str, Any]) -> Optional[str]:
        value = document.get(self.base_path_key)
        return None if value is None else str(value)

    def rest_path(self, raw_method: dict[str, Any]) -> str:
        value = raw_method.get(self.rest_path_key)
        return "" if value is None else str(value)

    def rpc_name(self, raw_method: dict[str, Any]) -> Optional[str]:
        value = raw_method.get(self.rpc_name_key)
        return None if value is None else str(value)


DIALECTS: dict[DiscoveryVersion, Dialect] = {
    DiscoveryVersion.V0_3: Dialect(
        version=DiscoveryVersion.V0_3,
        base_path_key="basePath",
        rest_path_key="pathUrl",
        rpc_name_key="rpcName",
        nested_resources=False,
        reads_schemas=False,
        reads_common_parameters=False,
        parameter_location=_location_implicit,
    ),
    DiscoveryVersion.V1_0: Dialect(
        version=DiscoveryVersion.V1_0,
        base_path_key="restBasePath",
        rest_path_key="restPath",
        rpc_name_key="rpcMethod",
        nested_resources=True,
        reads_schemas=True,
        reads_common_parameters=True,
        parameter_location=_location_explicit,
    ),
}


def get_dialect(version: DiscoveryVersion | str) -> Dialect:
    """Return the :class:`Dialect` for *version*.

    Args:
        version: A :class:`DiscoveryVersion` or its string value
            (``"0.3"`` / ``"1.0"``).

    Raises:
        ValueError: If *version* names no supported dialect.
    """
    return DIALECTS[DiscoveryVersion(version)]
