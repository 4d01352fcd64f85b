"""Field/constraint interpreter.

Read-only queries over compiled schema nodes used by the documentation
generator. The validator evaluates keywords in the same canonical order.
"""

from dataclasses import dataclass, field
from typing import Any

from schemakit.schema import (
    AnyNode,
    ArrayNode,
    EnumNode,
    NumberNode,
    ObjectNode,
    SchemaNode,
    StringNode,
    UnionNode,
)

# Fixed order in which constraints are reported and rendered
CANONICAL_ORDER = (
    "enum",
    "pattern",
    "format",
    "minLength",
    "maxLength",
    "minimum",
    "maximum",
    "minItems",
    "maxItems",
)


@dataclass(frozen=True)
class TypeDescriptor:
    """Declared type(s) of a schema node.

    An empty ``names`` tuple means the node is unconstrained.
    """

    names: tuple[str, ...] = ()

    @property
    def is_unconstrained(self) -> bool:
        return not self.names

    @property
    def label(self) -> str:
        if self.is_unconstrained:
            return "any"
        return " | ".join(self.names)


@dataclass(frozen=True)
class Constraint:
    """One declared constraint and its parameters."""

    kind: str
    params: dict[str, Any] = field(default_factory=dict)


def type_of(node: SchemaNode) -> TypeDescriptor:
    """Return the declared type(s) of a node."""
    match node:
        case AnyNode() | EnumNode():
            return TypeDescriptor()
        case UnionNode(members=members):
            return TypeDescriptor(tuple(member.type_name for member in members))
        case _:
            return TypeDescriptor((node.type_name,))


def required_children(node: SchemaNode) -> tuple[str, ...]:
    """Return required property names in declared order.

    Empty for nodes that are not objects.
    """
    match node:
        case ObjectNode(required=required):
            return required
        case UnionNode(members=members):
            for member in members:
                if isinstance(member, ObjectNode):
                    return member.required
    return ()


def _own_constraints(node: SchemaNode) -> list[Constraint]:
    constraints = []

    if node.enum is not None:
        constraints.append(Constraint("enum", {"allowed_values": list(node.enum)}))

    if isinstance(node, StringNode):
        if node.pattern is not None:
            constraints.append(Constraint("pattern", {"pattern": node.pattern}))
        if node.format is not None:
            constraints.append(Constraint("format", {"format": node.format}))
        if node.min_length is not None:
            constraints.append(Constraint("minLength", {"limit": node.min_length}))
        if node.max_length is not None:
            constraints.append(Constraint("maxLength", {"limit": node.max_length}))

    if isinstance(node, NumberNode):
        if node.minimum is not None:
            constraints.append(Constraint("minimum", {"limit": node.minimum}))
        if node.maximum is not None:
            constraints.append(Constraint("maximum", {"limit": node.maximum}))

    if isinstance(node, ArrayNode):
        if node.min_items is not None:
            constraints.append(Constraint("minItems", {"limit": node.min_items}))
        if node.max_items is not None:
            constraints.append(Constraint("maxItems", {"limit": node.max_items}))

    return constraints


def constraints_of(node: SchemaNode) -> list[Constraint]:
    """Return every constraint declared on a node, in canonical order.

    For a union node the members' constraints are merged; the first member
    declaring a given kind wins.
    """
    if not isinstance(node, UnionNode):
        return _own_constraints(node)

    merged: dict[str, Constraint] = {}
    for member in node.members:
        for constraint in _own_constraints(member):
            merged.setdefault(constraint.kind, constraint)
    return sorted(merged.values(), key=lambda c: CANONICAL_ORDER.index(c.kind))


def examples_of(node: SchemaNode) -> list[Any]:
    return list(node.examples)


def default_of(node: SchemaNode) -> tuple[bool, Any]:
    """Return ``(present, value)`` so a declared ``null`` default is kept."""
    return node.has_default, node.default


def object_variant(node: SchemaNode) -> ObjectNode | None:
    """Return the object form of a node, looking inside unions."""
    if isinstance(node, ObjectNode):
        return node
    if isinstance(node, UnionNode):
        for member in node.members:
            if isinstance(member, ObjectNode):
                return member
    return None


def array_variant(node: SchemaNode) -> ArrayNode | None:
    """Return the array form of a node, looking inside unions."""
    if isinstance(node, ArrayNode):
        return node
    if isinstance(node, UnionNode):
        for member in node.members:
            if isinstance(member, ArrayNode):
                return member
    return None
