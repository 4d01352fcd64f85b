"""Tests for schema loading and compilation."""

import json
from pathlib import Path

import pytest

from schemakit.errors import SchemaError
from schemakit.schema import (
    AnyNode,
    ArrayNode,
    BooleanNode,
    EnumNode,
    IntegerNode,
    NullNode,
    NumberNode,
    ObjectNode,
    StringNode,
    UnionNode,
    compile_schema,
    load_schema,
)
from tests.conftest import plugin_schema, write_json


class TestCompileSchemaVariants:
    """Tests for picking the node variant from the declared type."""

    def test_object_with_properties(self) -> None:
        """Verify object nodes keep properties and required names in order."""
        # Given
        data = plugin_schema()

        # When
        node = compile_schema(data)

        # Then
        assert isinstance(node, ObjectNode)
        assert list(node.properties)[:3] == ["id", "name", "version"]
        assert node.required == ("id", "name", "version", "category", "status")
        assert node.description == "Schema for plugin manifest files."

    def test_scalar_variants(self) -> None:
        """Verify each scalar type compiles to its own variant."""
        # Given
        cases = {
            "string": StringNode,
            "number": NumberNode,
            "integer": IntegerNode,
            "boolean": BooleanNode,
            "null": NullNode,
        }

        # When/Then
        for type_name, expected in cases.items():
            node = compile_schema({"type": type_name})
            assert type(node) is expected

    def test_array_items_compiled(self) -> None:
        """Verify array items are compiled recursively."""
        # Given
        data = {"type": "array", "items": {"type": "string"}, "minItems": 0}

        # When
        node = compile_schema(data)

        # Then
        assert isinstance(node, ArrayNode)
        assert isinstance(node.items, StringNode)
        assert node.min_items == 0

    def test_type_list_compiles_to_union(self) -> None:
        """Verify a list-valued type produces one member per type."""
        # Given
        data = {"type": ["string", "null"], "maxLength": 5}

        # When
        node = compile_schema(data)

        # Then
        assert isinstance(node, UnionNode)
        assert [type(m) for m in node.members] == [StringNode, NullNode]
        assert node.members[0].max_length == 5

    def test_single_entry_type_list_is_not_a_union(self) -> None:
        """Verify ["string"] compiles like "string"."""
        # When
        node = compile_schema({"type": ["string"]})

        # Then
        assert isinstance(node, StringNode)

    def test_enum_without_type(self) -> None:
        """Verify an untyped enum compiles to an enum leaf."""
        # When
        node = compile_schema({"enum": ["a", 1]})

        # Then
        assert isinstance(node, EnumNode)
        assert node.enum == ("a", 1)

    def test_untyped_node_is_unconstrained(self) -> None:
        """Verify a node without type or enum accepts anything."""
        # When
        node = compile_schema({"description": "anything"})

        # Then
        assert isinstance(node, AnyNode)

    def test_untyped_object_keywords_compile_to_object(self) -> None:
        """Verify properties and required without a type still make an object."""
        # Given
        data = {
            "description": "Untyped root.",
            "required": ["id"],
            "properties": {"id": {"type": "string"}},
        }

        # When
        node = compile_schema(data)

        # Then
        assert isinstance(node, ObjectNode)
        assert node.required == ("id",)
        assert isinstance(node.properties["id"], StringNode)

    def test_untyped_items_compile_to_array(self) -> None:
        # When
        node = compile_schema({"items": {"type": "integer"}})

        # Then
        assert isinstance(node, ArrayNode)
        assert isinstance(node.items, IntegerNode)

    def test_nodes_keep_their_subschema(self) -> None:
        """Verify each node carries the document it was compiled from."""
        # Given
        data = plugin_schema()

        # When
        node = compile_schema(data)

        # Then
        assert node.document == data
        assert node.properties["id"].document == data["properties"]["id"]

    def test_inapplicable_constraints_are_dropped(self) -> None:
        """Verify string bounds on a number node are not carried."""
        # When
        node = compile_schema({"type": "number", "minLength": 3, "minimum": 1})

        # Then
        assert isinstance(node, NumberNode)
        assert not hasattr(node, "min_length")
        assert node.minimum == 1

    def test_null_default_is_tracked(self) -> None:
        """Verify an explicit null default is distinguished from no default."""
        # When
        with_default = compile_schema({"type": "string", "default": None})
        without_default = compile_schema({"type": "string"})

        # Then
        assert with_default.has_default is True
        assert without_default.has_default is False


class TestCompileSchemaErrors:
    """Tests for rejecting malformed schemas."""

    def test_duplicate_required_names_rejected(self) -> None:
        """Verify required names must be unique."""
        with pytest.raises(SchemaError, match="required"):
            compile_schema({"type": "object", "required": ["a", "b", "a"]})

    def test_root_must_be_object(self) -> None:
        """Verify a non-object root is rejected."""
        # When/Then
        with pytest.raises(SchemaError, match="JSON object"):
            compile_schema(["not", "a", "schema"])

    def test_unknown_type_name(self) -> None:
        """Verify unsupported type names are rejected."""
        # When/Then
        with pytest.raises(SchemaError, match="type"):
            compile_schema({"type": "date"})

    def test_required_must_be_list(self) -> None:
        """Verify a malformed required entry is rejected."""
        # When/Then
        with pytest.raises(SchemaError, match="required"):
            compile_schema({"type": "object", "required": "id"})

    def test_negative_length_rejected(self) -> None:
        """Verify negative string bounds are rejected."""
        # When/Then
        with pytest.raises(SchemaError, match="minLength"):
            compile_schema({"type": "string", "minLength": -1})

    def test_metaschema_violation_names_location(self) -> None:
        """Verify a keyword failing the Draft-07 metaschema is reported by location."""
        # Given
        data = {"type": "object", "properties": {"tags": {"type": "array", "minItems": "one"}}}

        # When/Then
        with pytest.raises(SchemaError, match="properties.tags.minItems"):
            compile_schema(data)

    def test_invalid_pattern_rejected(self) -> None:
        """Verify an invalid regular expression is a schema error."""
        # Given
        data = {"type": "object", "properties": {"id": {"type": "string", "pattern": "(["}}}

        # When/Then
        with pytest.raises(SchemaError, match="properties.id.pattern"):
            compile_schema(data)


class TestLoadSchema:
    """Tests for reading schema files."""

    def test_loads_schema_file(self, tmp_path: Path) -> None:
        """Verify a schema file is read and compiled."""
        # Given
        path = write_json(tmp_path / "schema.json", plugin_schema())

        # When
        node = load_schema(path)

        # Then
        assert isinstance(node, ObjectNode)
        assert "id" in node.properties

    def test_missing_file(self, tmp_path: Path) -> None:
        """Verify a missing schema file raises SchemaError."""
        # Given
        path = tmp_path / "missing.json"

        # When/Then
        with pytest.raises(SchemaError) as exc_info:
            load_schema(path)
        assert exc_info.value.path == path

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Verify a schema that is not JSON raises SchemaError."""
        # Given
        path = tmp_path / "schema.json"
        path.write_text("{ not json")

        # When/Then
        with pytest.raises(SchemaError, match="invalid JSON"):
            load_schema(path)

    def test_extra_keywords_are_allowed(self, tmp_path: Path) -> None:
        """Verify $schema, $id and other keywords do not break loading."""
        # Given
        path = tmp_path / "schema.json"
        path.write_text(
            json.dumps(
                {
                    "$id": "https://example.com/plugin.schema.json",
                    "$schema": "http://json-schema.org/draft-07/schema#",
                    "type": "object",
                }
            )
        )

        # When
        node = load_schema(path)

        # Then
        assert isinstance(node, ObjectNode)
