"""Tests for specref.parser.deserializer."""

from __future__ import annotations

from typing import Any

import pytest

from specref.exceptions import SpecParseError
from specref.models import OpenAPIDocument, Parameter, Schema
from specref.parser.deserializer import (
    deserialize,
    deserialize_into_tree,
    deserialize_tree,
    get_schema,
    parse_document,
)


class TestDeserializeIntoTree:
    def test_parses_yaml(self) -> None:
        tree = deserialize_into_tree("a:\n  b: 1\n", "x.yaml")
        assert tree == {"a": {"b": 1}}

    def test_parses_json(self) -> None:
        assert deserialize_into_tree('{"a": [1, 2]}', "x.json") == {"a": [1, 2]}

    def test_allows_non_mapping_documents(self) -> None:
        assert deserialize_into_tree("[1, 2, 3]", "list.json") == [1, 2, 3]

    def test_malformed_json_raises(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            deserialize_into_tree("{broken", "x.json")


class TestDeserialize:
    def test_text_into_model(self) -> None:
        param = deserialize('{"name": "limit", "in": "query"}', "p.json", Parameter)
        assert isinstance(param, Parameter)
        assert param.name == "limit"
        assert param.location == "query"

    def test_tree_into_model(self) -> None:
        param = deserialize_tree({"name": "id", "in": "path", "required": True}, "p.yaml", Parameter)
        assert param.required is True

    def test_object_returns_tree_unchanged(self) -> None:
        tree = {"anything": ["goes"]}
        assert deserialize_tree(tree, "x.yaml", object) is tree

    def test_plain_container_type(self) -> None:
        assert deserialize("a: 1\n", "x.yaml", dict) == {"a": 1}

    def test_validation_failure_raises(self) -> None:
        with pytest.raises(SpecParseError, match="Cannot deserialize content of p.json as Parameter"):
            deserialize('{"name": ["not", "a", "string"]}', "p.json", Parameter)

    def test_extension_keys_preserved(self) -> None:
        param = deserialize_tree({"name": "q", "in": "query", "x-internal": True}, "p.yaml", Parameter)
        assert param.model_extra == {"x-internal": True}


class TestGetSchema:
    def test_records_location(self) -> None:
        schema = get_schema({"type": "object"}, "components.schemas.Pet")
        assert isinstance(schema, Schema)
        assert schema.location == "components.schemas.Pet"

    def test_stamps_nested_schemas(self) -> None:
        node: dict[str, Any] = {
            "type": "object",
            "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
            "allOf": [{"type": "object"}],
        }
        schema = get_schema(node, "components.schemas.Pet")
        tags = schema.properties["tags"]
        assert tags.location == "components.schemas.Pet.properties.tags"
        assert tags.items.location == "components.schemas.Pet.properties.tags.items"
        assert schema.all_of[0].location == "components.schemas.Pet.allOf.0"

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(SpecParseError, match="components.schemas.Name is not a schema object"):
            get_schema("just a string", "components.schemas.Name")

    def test_keeps_ref(self) -> None:
        schema = get_schema({"$ref": "#/components/schemas/Other"}, "a.b")
        assert schema.ref == "#/components/schemas/Other"


class TestParseDocument:
    def test_builds_document(self, root_raw: dict[str, Any]) -> None:
        document = parse_document(root_raw)
        assert isinstance(document, OpenAPIDocument)
        assert set(document.components.schemas) == {"Pet", "a/b"}
        assert "/pets" in document.paths

    def test_rejects_swagger_2(self) -> None:
        with pytest.raises(SpecParseError, match="Swagger 2.0 is not supported"):
            parse_document({"swagger": "2.0", "paths": {}})

    def test_rejects_missing_version(self) -> None:
        with pytest.raises(SpecParseError, match="Missing 'openapi' field"):
            parse_document({"paths": {}})
