"""Markdown reference generation from a schema.

Output depends only on the schema, except for an optional trailing
"Last updated" line, so regenerated files diff cleanly. Rendering never
fails on inconsistent schemas: sections that cannot be produced are left
out.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from schemakit.interpreter import (
    array_variant,
    constraints_of,
    default_of,
    examples_of,
    object_variant,
    required_children,
    type_of,
)
from schemakit.schema import ObjectNode, SchemaNode

MAX_HEADING_LEVEL = 6
FIELD_HEADING_LEVEL = 3


def _heading(level: int, text: str) -> str:
    return f"{'#' * min(level, MAX_HEADING_LEVEL)} {text}\n"


def _literal(value: Any) -> str:
    """Render a literal value: strings as-is, everything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _bounds(params: dict[str, dict[str, Any]], low: str, high: str) -> str | None:
    parts = []
    if low in params:
        parts.append(f"min: {params[low]['limit']}")
    if high in params:
        parts.append(f"max: {params[high]['limit']}")
    return ", ".join(parts) or None


def render_property(path: str, node: SchemaNode, is_required: bool, level: int) -> str:
    """Render one property as a markdown block."""
    lines = [
        _heading(level, f"`{path}`"),
        f"**Type:** `{type_of(node).label}`",
        f"**Required:** {'✅ Yes' if is_required else '❌ No'}",
        "",
    ]

    if node.description:
        lines += [node.description, ""]

    params = {constraint.kind: constraint.params for constraint in constraints_of(node)}

    if "enum" in params:
        lines.append("**Allowed values:**")
        lines += [f"- `{_literal(value)}`" for value in params["enum"]["allowed_values"]]
        lines.append("")

    if "pattern" in params:
        lines += [f"**Pattern:** `{params['pattern']['pattern']}`", ""]

    if "format" in params:
        lines += [f"**Format:** `{params['format']['format']}`", ""]

    length = _bounds(params, "minLength", "maxLength")
    if length:
        lines += [f"**String length:** {length}", ""]

    value_range = _bounds(params, "minimum", "maximum")
    if value_range:
        lines += [f"**Range:** {value_range}", ""]

    item_count = _bounds(params, "minItems", "maxItems")
    if item_count:
        lines += [f"**Items:** {item_count}", ""]

    examples = examples_of(node)
    if examples:
        lines += ["**Examples:**", ", ".join(f"`{_literal(ex)}`" for ex in examples), ""]

    has_default, default = default_of(node)
    if has_default:
        lines += [f"**Default:** `{json.dumps(default, ensure_ascii=False)}`", ""]

    return "\n".join(lines) + "\n"


def render_fields(node: ObjectNode, prefix: str = "", level: int = FIELD_HEADING_LEVEL) -> str:
    """Render every property of an object node, recursing into nested shapes.

    Nested object properties go one heading level deeper under dotted paths
    (``links.documentation``). Arrays of objects get an "Item Properties"
    sub-section with ``name[].field`` paths.
    """
    required = required_children(node)
    blocks = []

    for name, child in node.properties.items():
        path = f"{prefix}.{name}" if prefix else name
        blocks.append(render_property(path, child, name in required, level))

        nested = object_variant(child)
        if nested is not None and nested.properties:
            blocks.append(render_fields(nested, path, level + 1))

        array = array_variant(child)
        item_object = object_variant(array.items) if array and array.items else None
        if item_object is not None and item_object.properties:
            blocks.append(_heading(level + 1, f"`{path}[]` Item Properties") + "\n")
            if item_object.description:
                blocks.append(f"{item_object.description}\n\n")
            blocks.append(render_fields(item_object, f"{path}[]", level + 2))

    return "".join(blocks)


def format_timestamp(moment: datetime) -> str:
    """Format a timestamp as UTC ISO 8601 with milliseconds (``...Z``)."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def render_markdown(
    schema: SchemaNode,
    *,
    title: str | None = None,
    schema_name: str = "schema.json",
    regenerate_command: str | None = None,
    generated_at: datetime | None = None,
) -> str:
    """Render a schema into a markdown reference document.

    Args:
        schema: Compiled root schema node.
        title: Document title; defaults to the schema title.
        schema_name: Schema file name linked from the header.
        regenerate_command: Command shown for regenerating the document.
        generated_at: If given, a "Last updated" line is appended as the
            final line. Everything above it is deterministic.

    Returns:
        The markdown document.
    """
    heading = title or schema.title or "Schema Documentation"
    root = object_variant(schema)
    required = required_children(schema)

    parts = [
        _heading(1, heading),
        f"> **Auto-generated documentation from [`{schema_name}`](./{schema_name})**\n",
        ">\n",
        "> This documentation is automatically generated and should not be manually edited.\n",
        f"> Changes should be made in `{schema_name}` and the documentation regenerated",
    ]
    if regenerate_command:
        parts.append(f" using:\n> `{regenerate_command}`\n")
    else:
        parts.append(".\n")

    parts.append("\n" + _heading(2, "Overview"))
    if schema.description:
        parts.append(f"\n{schema.description}\n")

    parts.append("\n" + _heading(2, "Required Fields"))
    if required:
        parts.append("\nThe following fields are mandatory for every record:\n\n")
        parts += [f"- `{name}`\n" for name in required]
    else:
        parts.append("\nNo fields are required.\n")

    parts.append("\n" + _heading(2, "Field Reference"))
    if root is not None and root.properties:
        parts.append("\n" + render_fields(root))

    markdown = "".join(parts).rstrip("\n") + "\n"
    if generated_at is not None:
        markdown += f"\n---\n\n**Last updated:** {format_timestamp(generated_at)}\n"

    return markdown


def write_docs(path: Path, markdown: str) -> None:
    """Write generated markdown to disk.

    Raises:
        OSError: If the file cannot be written.
    """
    path.write_text(markdown, encoding="utf-8")
