"""Shared test fixtures for discovery_client.

Provides discovery document fixtures (raw text and built services), a small
hand-made service for URL tests, isolation from ``DISCOVERY_CLIENT_*``
environment variables, and helpers for recording requests sent through an
``httpx.MockTransport``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from discovery_client.config import ClientConfig
from discovery_client.discovery import create_service
from discovery_client.models import (
    DiscoveryVersion,
    FactoryParameters,
    Method,
    Parameter,
    Resource,
    Service,
)
from discovery_client.request import RequestExecutor

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``DISCOVERY_CLIENT_*`` settings from the real environment out of tests."""
    for suffix in (
        "CONFIG",
        "APP_NAME",
        "DEVELOPER_KEY",
        "REPRESENTATION",
        "SERVER_URL",
        "GZIP",
        "TIMEOUT",
        "VERIFY_SSL",
    ):
        monkeypatch.delenv(f"DISCOVERY_CLIENT_{suffix}", raising=False)


# ---------------------------------------------------------------------------
# Discovery document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def buzz_v0_3_text() -> str:
    return read_fixture("buzz_v0_3.json")


@pytest.fixture
def buzz_v1_0_text() -> str:
    return read_fixture("buzz_v1_0.json")


@pytest.fixture
def adsense_text() -> str:
    return read_fixture("adsense_v1_0.json")


@pytest.fixture
def buzz_v0_3(buzz_v0_3_text: str) -> Service:
    """Buzz service built from the 0.3 dialect document."""
    return create_service(buzz_v0_3_text, DiscoveryVersion.V0_3)


@pytest.fixture
def buzz_v1_0(buzz_v1_0_text: str) -> Service:
    """Buzz service built from the 1.0 dialect document."""
    return create_service(buzz_v1_0_text, DiscoveryVersion.V1_0)


@pytest.fixture
def adsense(adsense_text: str) -> Service:
    """AdSense service with three levels of nested resources."""
    return create_service(adsense_text, DiscoveryVersion.V1_0)


@pytest.fixture
def buzz_no_gzip(buzz_v1_0_text: str) -> Service:
    return create_service(
        buzz_v1_0_text, DiscoveryVersion.V1_0, FactoryParameters(gzip_enabled=False)
    )


# ---------------------------------------------------------------------------
# Hand-built service
# ---------------------------------------------------------------------------


@pytest.fixture
def defaults_method() -> Method:
    """GET method with one required and four optional query parameters.

    The optional parameters cover every value state: supplied, ``None``
    with a default, empty with a default, and never supplied.
    """
    return Method(
        name="TestMethod",
        http_method="GET",
        rest_path="",
        parameters={
            "required": Parameter(name="required", required=True),
            "optionalWithValue": Parameter(name="optionalWithValue", default="x"),
            "optionalWithNull": Parameter(name="optionalWithNull", default="c"),
            "optionalWithEmpty": Parameter(name="optionalWithEmpty", default="d"),
            "optionalNotPresent": Parameter(name="optionalNotPresent", default="DoesNotDisplay"),
        },
    )


@pytest.fixture
def example_service(defaults_method: Method) -> Service:
    """Minimal service rooted at ``https://example.com/``."""
    return Service(
        name="example",
        version="v1",
        base_uri="https://example.com/",
        discovery_version=DiscoveryVersion.V1_0,
        resources={
            "TestResource": Resource(
                name="TestResource", methods={defaults_method.name: defaults_method}
            )
        },
    )


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests captured by :func:`recording_executor`."""
    return []


@pytest.fixture
def recording_executor(
    sent_requests: list[httpx.Request],
) -> Callable[..., RequestExecutor]:
    """Factory for executors backed by a recording ``httpx.MockTransport``.

    Every request is appended to ``sent_requests`` before *respond* builds
    the response. The default responder answers ``200 {}``.
    """

    def factory(
        respond: Callable[[httpx.Request], httpx.Response] | None = None,
        config: ClientConfig | None = None,
    ) -> RequestExecutor:
        def handler(request: httpx.Request) -> httpx.Response:
            request.read()
            sent_requests.append(request)
            if respond is None:
                return httpx.Response(200, json={})
            return respond(request)

        return RequestExecutor(config, transport=httpx.MockTransport(handler))

    return factory
