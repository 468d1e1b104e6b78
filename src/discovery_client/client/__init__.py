"""High-level clients bound to a discovered service.

Classes:
    :class:`DiscoveryClient` -- ``execute_request(resource, method, body, parameters)``.
    :class:`SchemaAwareClient` -- same, with object bodies via a :class:`Serializer`.
    :class:`JsonSerializer` -- default pydantic-backed serializer.

Example::

    from discovery_client.client import DiscoveryClient

    client = DiscoveryClient(service, developer_key="abc")
    response = client.execute_request("mgmt.adunits", "list", parameters={"clientId": "x"})
"""

from discovery_client.client.facade import DiscoveryClient
from discovery_client.client.serialization import JsonSerializer, SchemaAwareClient, Serializer
from discovery_client.exceptions import SerializationError

__all__ = [
    "DiscoveryClient",
    "JsonSerializer",
    "SchemaAwareClient",
    "SerializationError",
    "Serializer",
]
