"""Tests for pure request spec construction."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from discovery_client.auth import NullAuthenticator
from discovery_client.exceptions import UnsupportedHttpMethodError
from discovery_client.models import HttpMethod, Method, Representation, Service
from discovery_client.request import (
    build_request,
    coerce_parameters,
    parse_query_string,
    request_url,
    resolve_http_method,
)


class TestBuildRequest:
    def test_defaults(self, buzz_v1_0: Service) -> None:
        method = buzz_v1_0.get_method("activities", "list")
        spec = build_request(buzz_v1_0, method, {"userId": "@me", "scope": "@self"})
        assert spec.http_method is HttpMethod.GET
        assert spec.representation is Representation.JSON
        assert isinstance(spec.authenticator, NullAuthenticator)
        assert spec.developer_key is None
        assert spec.body is None
        assert spec.supports_retry is True

    def test_spec_is_immutable(self, buzz_v1_0: Service) -> None:
        spec = build_request(buzz_v1_0, buzz_v1_0.get_method("activities", "count"))
        with pytest.raises(ValidationError):
            spec.body = "changed"  # type: ignore[misc]

    def test_query_string_input(self, buzz_v1_0: Service) -> None:
        method = buzz_v1_0.get_method("activities", "list")
        spec = build_request(buzz_v1_0, method, "userId=@me&scope=@self&max-results=5")
        assert spec.parameters == {"userId": "@me", "scope": "@self", "max-results": "5"}

    def test_request_url(self, buzz_v1_0: Service) -> None:
        method = buzz_v1_0.get_method("activities", "list")
        spec = build_request(
            buzz_v1_0,
            method,
            {"userId": "@me", "scope": "@self", "truncateAtom": True},
            developer_key="k",
            representation="atom",
        )
        assert request_url(spec) == (
            "https://www.googleapis.com/buzz/v1/activities/@me/@self"
            "?alt=atom&key=k&truncateAtom=true"
        )

    def test_verb_mapping(self, adsense: Service) -> None:
        method = adsense.get_method("mgmt.properties.channels", "delete")
        assert resolve_http_method(method) is HttpMethod.DELETE

    def test_unknown_verb(self, buzz_v1_0: Service) -> None:
        method = Method(name="trace", http_method="TRACE", rest_path="x")
        with pytest.raises(UnsupportedHttpMethodError, match="TRACE"):
            build_request(buzz_v1_0, method)


class TestCoerceParameters:
    def test_coercion(self) -> None:
        values = coerce_parameters(
            {
                "flag": False,
                "count": 5,
                "ratio": Decimal("1.50"),
                "name": "x",
                "missing": None,
                "many": ["a", 2, None, True],
            }
        )
        assert values == {
            "flag": "false",
            "count": "5",
            "ratio": "1.50",
            "name": "x",
            "missing": None,
            "many": ["a", "2", "true"],
        }

    def test_empty(self) -> None:
        assert coerce_parameters(None) == {}


class TestParseQueryString:
    def test_pairs(self) -> None:
        assert parse_query_string("a=1&b=2") == {"a": "1", "b": "2"}

    def test_leading_question_mark(self) -> None:
        assert parse_query_string("?a=1") == {"a": "1"}

    def test_repeated_name(self) -> None:
        assert parse_query_string("u=1&u=2&u=3") == {"u": ["1", "2", "3"]}

    def test_escapes_decoded(self) -> None:
        assert parse_query_string("q=a%20b&empty=&flag") == {"q": "a b", "empty": "", "flag": ""}

    def test_blank(self) -> None:
        assert parse_query_string("") == {}
