"""Tests for schema resolution."""

from __future__ import annotations

import logging

import pytest

from discovery_client.discovery.schemas import iter_refs, parse_schema, resolve_schemas, schema_reference
from discovery_client.models import SchemaType, Service


class TestResolveSchemas:
    def test_fixture_schemas(self, buzz_v1_0: Service) -> None:
        assert set(buzz_v1_0.schemas) == {"Activity", "ActivityFeed", "Link"}
        activity = buzz_v1_0.get_schema("Activity")
        assert activity is not None
        assert activity.type is SchemaType.OBJECT
        assert activity.properties["links"].type is SchemaType.ARRAY
        assert activity.properties["links"].items.ref == "Link"

    def test_unknown_type_becomes_any(self, buzz_v1_0: Service) -> None:
        geocode = buzz_v1_0.schemas["Activity"].properties["geocode"]
        assert geocode.type is SchemaType.ANY

    def test_additional_properties(self, buzz_v1_0: Service) -> None:
        tags = buzz_v1_0.schemas["ActivityFeed"].properties["tags"]
        assert tags.additional_properties is not None
        assert tags.additional_properties.type is SchemaType.STRING

    def test_unknown_reference_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        raw = {"A": {"type": "object", "properties": {"b": {"$ref": "Missing"}}}}
        with caplog.at_level(logging.WARNING):
            schemas = resolve_schemas(raw)
        assert schemas["A"].properties["b"].ref == "Missing"
        assert "Missing" in caplog.text

    def test_unknown_method_schema_warns(
        self, buzz_v1_0_text: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        from discovery_client.discovery import create_service

        with caplog.at_level(logging.WARNING):
            service = create_service(buzz_v1_0_text, "1.0")
        assert service.get_method("activities", "count").response_schema == "CountFeed"
        assert "CountFeed" in caplog.text

    @pytest.mark.parametrize("raw", [None, [1, 2]])
    def test_missing_or_malformed_map(self, raw) -> None:
        assert resolve_schemas(raw) == {}


class TestParseSchema:
    def test_id_defaults_to_name(self) -> None:
        assert parse_schema({"type": "string"}, schema_id="Name").id == "Name"

    def test_non_object_is_placeholder(self) -> None:
        assert parse_schema("nope").type is SchemaType.ANY

    def test_iter_refs(self) -> None:
        schema = parse_schema(
            {
                "type": "object",
                "properties": {
                    "a": {"$ref": "A"},
                    "list": {"type": "array", "items": {"$ref": "B"}},
                },
                "additionalProperties": {"$ref": "C"},
            }
        )
        assert sorted(iter_refs(schema)) == ["A", "B", "C"]

    @pytest.mark.parametrize(
        "raw,expected", [({"$ref": "X"}, "X"), ("Y", "Y"), (None, None), ({}, None)]
    )
    def test_schema_reference(self, raw, expected) -> None:
        assert schema_reference(raw) == expected
