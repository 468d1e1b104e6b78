"""Build :class:`~discovery_client.models.Schema` entities from a ``schemas`` map.

Discovery 1.0 documents carry a top-level ``schemas`` object whose entries
describe request and response bodies. References between schemas use a bare
id (``{"$ref": "Link"}``), not a JSON pointer.

Resolution is forgiving: a type this module does not understand becomes the
untyped :attr:`~discovery_client.models.SchemaType.ANY` placeholder, and a
reference to a schema that does not exist is kept as-is. Both cases are
logged as warnings rather than failing the whole document.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from discovery_client.models import Schema, SchemaType

logger = logging.getLogger(__name__)

_KNOWN_TYPES = frozenset(t.value for t in SchemaType)


def resolve_schemas(raw_schemas: Any) -> dict[str, Schema]:
    """Build every schema in a ``schemas`` map and check their references.

    Args:
        raw_schemas: The value of the document's ``schemas`` key. ``None`` or
            a non-object yields an empty map.

    Returns:
        Schemas keyed by name, in document order.
    """
    if not isinstance(raw_schemas, dict):
        if raw_schemas is not None:
            logger.warning("Ignoring 'schemas' of type %s", type(raw_schemas).__name__)
        return {}

    schemas = {name: parse_schema(raw, schema_id=name) for name, raw in raw_schemas.items()}
    for name, schema in schemas.items():
        for ref in iter_refs(schema):
            if ref not in schemas:
                logger.warning("Schema '%s' references unknown schema '%s'", name, ref)
    return schemas


def parse_schema(raw: Any, schema_id: Optional[str] = None) -> Schema:
    """Build a single :class:`Schema` from its raw JSON object.

    Args:
        raw: The schema object.
        schema_id: Id to assign when *raw* carries none.

    Returns:
        The schema. Malformed input degrades to an ``ANY`` placeholder.
    """
    if not isinstance(raw, dict):
        logger.warning("Schema %s is not an object, using untyped placeholder", schema_id or "<anonymous>")
        return Schema(id=schema_id, type=SchemaType.ANY)

    ref = raw.get("$ref")
    if ref is not None:
        return Schema(id=schema_id, ref=str(ref), description=_optional_str(raw.get("description")))

    properties_raw = raw.get("properties")
    properties = (
        {name: parse_schema(value) for name, value in properties_raw.items()}
        if isinstance(properties_raw, dict)
        else {}
    )
    items_raw = raw.get("items")
    additional_raw = raw.get("additionalProperties")

    return Schema(
        id=_optional_str(raw.get("id")) or schema_id,
        type=_schema_type(raw.get("type"), schema_id),
        description=_optional_str(raw.get("description")),
        properties=properties,
        items=parse_schema(items_raw) if items_raw is not None else None,
        additional_properties=(
            parse_schema(additional_raw) if isinstance(additional_raw, dict) else None
        ),
    )


def schema_reference(raw: Any) -> Optional[str]:
    """Extract a schema reference from a method's ``request``/``response`` value.

    Accepts either ``{"$ref": "Name"}`` or a bare string.
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        ref = raw.get("$ref")
        return None if ref is None else str(ref)
    return str(raw)


def iter_refs(schema: Schema) -> Iterator[str]:
    """Yield every schema id referenced anywhere inside *schema*."""
    if schema.ref is not None:
        yield schema.ref
    for child in schema.properties.values():
        yield from iter_refs(child)
    if schema.items is not None:
        yield from iter_refs(schema.items)
    if schema.additional_properties is not None:
        yield from iter_refs(schema.additional_properties)


def _schema_type(value: Any, schema_id: Optional[str]) -> SchemaType:
    if value is None:
        return SchemaType.ANY
    name = str(value)
    if name in _KNOWN_TYPES:
        return SchemaType(name)
    logger.warning(
        "Found unsupported type '%s' in schema %s, using untyped placeholder",
        name,
        schema_id or "<anonymous>",
    )
    return SchemaType.ANY


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
