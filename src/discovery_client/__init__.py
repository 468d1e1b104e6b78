"""discovery_client -- Call APIs described by discovery documents.

A discovery document is a JSON description of a web API: its resources,
their methods, and each method's parameters. This package reads such a
document with its own lenient JSON reader, builds an immutable service model
from it (both the 0.3 and 1.0 document dialects), and turns method calls into
validated HTTP requests.

Typical workflow::

    from discovery_client.client import DiscoveryClient
    from discovery_client.discovery import load_service

    service = load_service("buzz.json", "1.0")
    client = DiscoveryClient(service, developer_key="abc")
    response = client.execute_request("activities", "list",
                                      parameters={"userId": "@me", "scope": "@self"})

Modules:
    json_reader: Tokenizer and parser producing plain Python values.
    discovery: Dialect table and the model builder.
    request: Request spec construction, validation, URL building and execution.
    client: Service-bound facades.
    models: Pydantic models shared across the package.
    config: Client configuration (environment and JSON file).
    exceptions: Exception hierarchy.
    log: Optional Rich logging setup.
"""

__version__ = "0.1.0"
