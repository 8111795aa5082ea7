"""Shared test fixtures for Schema Insight tests."""

from datetime import datetime, timezone

import pytest

from schema_insight.models import Schema, SchemaMetadata, SchemaReference


def build_schema(
    name: str,
    content=None,
    refs=(),
    schema_id=None,
    last_modified=None,
) -> Schema:
    """Build a Schema whose references resolve by name.

    ``refs`` lists target schema names; each becomes a ``$ref`` to
    ``<name>.json``.
    """
    if content is None:
        content = {"type": "object", "properties": {}}
    return Schema(
        id=schema_id or f"id-{name}",
        name=name,
        content=content,
        references=tuple(SchemaReference(ref=f"{target}.json", schema_name=target) for target in refs),
        metadata=SchemaMetadata(
            last_modified=last_modified or datetime(2024, 1, 1, tzinfo=timezone.utc),
            file_size=0,
        ),
        validation_status="valid",
    )


def obj(**properties):
    """Object schema with the given property sub-schemas."""
    return {"type": "object", "properties": properties}


@pytest.fixture
def make_schema():
    """Factory fixture around :func:`build_schema`."""
    return build_schema


@pytest.fixture
def order_project():
    """Order -> Customer -> Address, no cycles."""
    return [
        build_schema(
            "Order",
            obj(id={"type": "string"}, customer={"$ref": "Customer.json"}),
            refs=["Customer"],
        ),
        build_schema(
            "Customer",
            obj(id={"type": "string"}, address={"$ref": "Address.json"}),
            refs=["Address"],
        ),
        build_schema("Address", obj(street={"type": "string"}, city={"type": "string"})),
    ]


@pytest.fixture
def mutual_project():
    """A <-> B."""
    return [
        build_schema("A", obj(b={"$ref": "B.json"}), refs=["B"]),
        build_schema("B", obj(a={"$ref": "A.json"}), refs=["A"]),
    ]


@pytest.fixture
def schema_dir(tmp_path):
    """A small on-disk project with a reference chain and one broken file."""
    (tmp_path / "order.schema.json").write_text(
        '{"title": "Order", "type": "object", "properties": {'
        '"id": {"type": "string"}, "customer": {"$ref": "customer.json"}}}'
    )
    (tmp_path / "customer.json").write_text(
        '{"type": "object", "properties": {'
        '"id": {"type": "string"}, "address": {"$ref": "./nested/address.json#/"}}}'
    )
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "address.json").write_text(
        '{"type": "object", "properties": {"street": {"type": "string"}}}'
    )
    (tmp_path / "broken.json").write_text("{not json")
    (tmp_path / "package.json").write_text('{"name": "not-a-schema"}')
    modules = tmp_path / "node_modules"
    modules.mkdir()
    (modules / "dep.json").write_text("{}")
    return tmp_path
