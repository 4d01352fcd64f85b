"""Schema Document model.

A schema file is read once per run and goes through three steps:

* The document is checked against the Draft-07 metaschema. A document that
  fails it is a malformed schema.
* ``RawSchemaNode`` is a Pydantic model giving typed access to the
  keywords the rest of the package reads.
* The compiled node variants (``ObjectNode``, ``StringNode``, ...) are
  decided once at load time from the declared ``type``, or from the object
  or array keywords of an untyped node. Each variant only carries the
  constraints that apply to it, so code walking the tree never re-inspects
  raw dictionaries.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Literal

import jsonschema
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from schemakit.errors import SchemaError, format_validation_errors

SchemaType = Literal["string", "number", "integer", "boolean", "object", "array", "null"]


class RawSchemaNode(BaseModel):
    """Accepted shape of one JSON Schema node (Draft-07 subset)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: SchemaType | list[SchemaType] | None = None
    title: str | None = None
    description: str | None = None
    required: list[str] = Field(default_factory=list)
    properties: dict[str, "RawSchemaNode"] = Field(default_factory=dict)
    items: "RawSchemaNode | None" = None
    additional_properties: "bool | RawSchemaNode" = Field(
        default=True,
        alias="additionalProperties",
    )
    enum: list[Any] | None = None
    pattern: str | None = None
    format: str | None = None
    min_length: int | None = Field(default=None, ge=0, alias="minLength")
    max_length: int | None = Field(default=None, ge=0, alias="maxLength")
    minimum: int | float | None = None
    maximum: int | float | None = None
    min_items: int | None = Field(default=None, ge=0, alias="minItems")
    max_items: int | None = Field(default=None, ge=0, alias="maxItems")
    examples: list[Any] | None = None
    default: Any = None


RawSchemaNode.model_rebuild()


@dataclass(frozen=True, kw_only=True)
class SchemaNode:
    """Annotations shared by every compiled node kind."""

    type_name: ClassVar[str] = "any"

    title: str | None = None
    description: str | None = None
    enum: tuple[Any, ...] | None = None
    examples: tuple[Any, ...] = ()
    default: Any = None
    has_default: bool = False
    document: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True, kw_only=True)
class ObjectNode(SchemaNode):
    type_name: ClassVar[str] = "object"

    properties: Mapping[str, SchemaNode] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    additional_properties: "bool | SchemaNode" = True


@dataclass(frozen=True, kw_only=True)
class ArrayNode(SchemaNode):
    type_name: ClassVar[str] = "array"

    items: SchemaNode | None = None
    min_items: int | None = None
    max_items: int | None = None


@dataclass(frozen=True, kw_only=True)
class StringNode(SchemaNode):
    type_name: ClassVar[str] = "string"

    pattern: str | None = None
    format: str | None = None
    min_length: int | None = None
    max_length: int | None = None


@dataclass(frozen=True, kw_only=True)
class NumberNode(SchemaNode):
    type_name: ClassVar[str] = "number"

    minimum: int | float | None = None
    maximum: int | float | None = None


@dataclass(frozen=True, kw_only=True)
class IntegerNode(NumberNode):
    type_name: ClassVar[str] = "integer"


@dataclass(frozen=True, kw_only=True)
class BooleanNode(SchemaNode):
    type_name: ClassVar[str] = "boolean"


@dataclass(frozen=True, kw_only=True)
class NullNode(SchemaNode):
    type_name: ClassVar[str] = "null"


@dataclass(frozen=True, kw_only=True)
class EnumNode(SchemaNode):
    """A node declaring ``enum`` without a ``type``."""

    type_name: ClassVar[str] = "enum"


@dataclass(frozen=True, kw_only=True)
class AnyNode(SchemaNode):
    """A node with neither ``type`` nor ``enum``; accepts any value."""


@dataclass(frozen=True, kw_only=True)
class UnionNode(SchemaNode):
    """A node whose ``type`` is a list; one compiled member per listed type."""

    type_name: ClassVar[str] = "union"

    members: tuple[SchemaNode, ...] = ()


def _common(raw: RawSchemaNode, data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "title": raw.title,
        "description": raw.description,
        "enum": tuple(raw.enum) if raw.enum is not None else None,
        "examples": tuple(raw.examples) if raw.examples else (),
        "default": raw.default,
        "has_default": "default" in raw.model_fields_set,
        "document": data,
    }


def _subschema(data: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    for key in keys:
        data = data.get(key, {})
    return data if isinstance(data, Mapping) else {}


def _compile_typed(
    type_name: str,
    raw: RawSchemaNode,
    data: Mapping[str, Any],
    common: dict[str, Any],
) -> SchemaNode:
    if type_name == "object":
        properties = {
            name: _compile(child, _subschema(data, "properties", name))
            for name, child in raw.properties.items()
        }
        additional: bool | SchemaNode
        if isinstance(raw.additional_properties, RawSchemaNode):
            additional = _compile(
                raw.additional_properties, _subschema(data, "additionalProperties")
            )
        else:
            additional = raw.additional_properties
        return ObjectNode(
            properties=properties,
            required=tuple(raw.required),
            additional_properties=additional,
            **common,
        )

    if type_name == "array":
        items = None
        if raw.items is not None:
            items = _compile(raw.items, _subschema(data, "items"))
        return ArrayNode(
            items=items,
            min_items=raw.min_items,
            max_items=raw.max_items,
            **common,
        )

    if type_name == "string":
        return StringNode(
            pattern=raw.pattern,
            format=raw.format,
            min_length=raw.min_length,
            max_length=raw.max_length,
            **common,
        )

    if type_name == "integer":
        return IntegerNode(minimum=raw.minimum, maximum=raw.maximum, **common)

    if type_name == "number":
        return NumberNode(minimum=raw.minimum, maximum=raw.maximum, **common)

    if type_name == "boolean":
        return BooleanNode(**common)

    return NullNode(**common)


def _implied_type(raw: RawSchemaNode) -> str | None:
    """Return the type an untyped node's keywords imply, if any.

    Object and array keywords apply without a declared ``type``, so a node
    carrying them is compiled as that kind.
    """
    if {"properties", "required", "additional_properties"} & raw.model_fields_set:
        return "object"
    if raw.items is not None:
        return "array"
    return None


def _compile(raw: RawSchemaNode, data: Mapping[str, Any]) -> SchemaNode:
    common = _common(raw, data)

    if raw.type is None or raw.type == []:
        implied = _implied_type(raw)
        if implied is not None:
            return _compile_typed(implied, raw, data, common)
        if raw.enum is not None:
            return EnumNode(**common)
        return AnyNode(**common)

    if isinstance(raw.type, str):
        return _compile_typed(raw.type, raw, data, common)

    types = list(dict.fromkeys(raw.type))
    if len(types) == 1:
        return _compile_typed(types[0], raw, data, common)

    members = tuple(_compile_typed(type_name, raw, data, common) for type_name in types)
    return UnionNode(members=members, **common)


def _location(error: jsonschema.SchemaError) -> str:
    return ".".join(str(part) for part in error.absolute_path)


def compile_schema(data: Any, source: Path | str = "<schema>") -> SchemaNode:
    """Compile a parsed JSON Schema document into tagged nodes.

    Args:
        data: The parsed schema document.
        source: Where the document came from, used in error messages.

    Returns:
        The compiled root node. Every node keeps the subschema it was
        compiled from in ``document``.

    Raises:
        SchemaError: If the document is not a well-formed schema.
    """
    if not isinstance(data, dict):
        raise SchemaError(source, "schema root must be a JSON object")

    try:
        jsonschema.Draft7Validator.check_schema(data)
    except jsonschema.SchemaError as e:
        location = _location(e)
        reason = f"'{location}': {e.message}" if location else e.message
        raise SchemaError(source, reason) from e

    try:
        raw = RawSchemaNode.model_validate(data)
    except ValidationError as e:
        raise SchemaError(source, format_validation_errors(e)) from e

    return _compile(raw, data)


def load_schema(path: Path) -> SchemaNode:
    """Load, check, and compile a schema file.

    Args:
        path: Path to the JSON schema file.

    Returns:
        The compiled root node, read-only for the rest of the run.

    Raises:
        SchemaError: If the file is missing, is not valid JSON, or is malformed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(path, e.strerror or str(e)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SchemaError(path, f"invalid JSON: {e}") from e

    return compile_schema(data, path)

