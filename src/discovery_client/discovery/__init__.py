"""Discovery document to service model.

Typical usage::

    from discovery_client.discovery import load_service

    service = load_service("buzz.json", "1.0")
    for resource_path, method in service.iter_methods():
        print(resource_path, method.name, method.http_method)

Sub-modules:

* :mod:`~discovery_client.discovery.versions` -- per-dialect field names.
* :mod:`~discovery_client.discovery.schemas` -- ``schemas`` map resolution.
* :mod:`~discovery_client.discovery.builder` -- the recursive model builder.
* :mod:`~discovery_client.discovery.loader` -- URL / file / stdin loading.
"""

from discovery_client.discovery.builder import ModelBuilder, build_service, create_service
from discovery_client.discovery.loader import load_document, load_service
from discovery_client.discovery.versions import DIALECTS, Dialect, get_dialect

__all__ = [
    "DIALECTS",
    "Dialect",
    "ModelBuilder",
    "build_service",
    "create_service",
    "get_dialect",
    "load_document",
    "load_service",
]
