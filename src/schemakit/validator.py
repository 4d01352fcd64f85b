"""Record validation against a compiled schema.

Keyword checking is done by a Draft-07 ``jsonschema`` validator built from
the schema document. Validation is exhaustive: every violation in a record
is collected in a single pass, and a batch always processes every record.
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator, ValidationError, validators

from schemakit.errors import RecordParseError
from schemakit.formats import FORMAT_CHECKER
from schemakit.interpreter import CANONICAL_ORDER
from schemakit.records import load_record
from schemakit.schema import SchemaNode
from schemakit.validation import BatchResult, FieldError, ValidationResult

# Keyword evaluation order; a node's own constraints come before its children
KEYWORD_ORDER = (
    "type",
    *CANONICAL_ORDER,
    "required",
    "properties",
    "patternProperties",
    "additionalProperties",
    "items",
)

SUBSCHEMA_KEYWORDS = (
    "additionalProperties",
    "additionalItems",
    "contains",
    "propertyNames",
    "not",
    "if",
    "then",
    "else",
)
SUBSCHEMA_LIST_KEYWORDS = ("items", "allOf", "anyOf", "oneOf")
SUBSCHEMA_MAP_KEYWORDS = ("properties", "patternProperties", "definitions")


def _required(
    validator: Draft7Validator, required: list[str], instance: Any, schema: Mapping[str, Any]
) -> Iterator[ValidationError]:
    """Report each missing property at its own path."""
    if not validator.is_type(instance, "object"):
        return
    for name in required:
        if name not in instance:
            yield ValidationError(f"must have required property '{name}'", path=[name])


def _additional_properties(
    validator: Draft7Validator,
    additional: bool | dict[str, Any],
    instance: Any,
    schema: Mapping[str, Any],
) -> Iterator[ValidationError]:
    """Report or validate each undeclared property at its own path."""
    if not validator.is_type(instance, "object"):
        return

    declared = schema.get("properties", {})
    patterns = [re.compile(pattern) for pattern in schema.get("patternProperties", {})]
    extras = [
        name
        for name in instance
        if name not in declared and not any(p.search(name) for p in patterns)
    ]

    if validator.is_type(additional, "object"):
        for name in extras:
            yield from validator.descend(instance[name], additional, path=name)
    elif additional is False:
        for name in extras:
            yield ValidationError("must NOT have additional properties", path=[name])


RecordValidator = validators.extend(
    Draft7Validator,
    {"required": _required, "additionalProperties": _additional_properties},
)


def _keyword_rank(keyword: str) -> int:
    if keyword in KEYWORD_ORDER:
        return KEYWORD_ORDER.index(keyword)
    return len(KEYWORD_ORDER)


def _is_object_schema(schema: Mapping[str, Any]) -> bool:
    declared = schema.get("type")
    if declared == "object" or (isinstance(declared, list) and "object" in declared):
        return True
    return declared is None and ("properties" in schema or "required" in schema)


def prepare_schema(schema: Any, *, strict: bool = False) -> Any:
    """Return a copy of a schema document ready for record validation.

    Keywords are reordered so errors come out in a stable order: the type
    check first, then the canonical constraints, then child properties. With
    ``strict``, object schemas that do not mention ``additionalProperties``
    are closed.
    """
    if not isinstance(schema, Mapping):
        return schema

    prepared: dict[str, Any] = {}
    for keyword in sorted(schema, key=_keyword_rank):
        value = schema[keyword]
        if keyword in SUBSCHEMA_MAP_KEYWORDS and isinstance(value, Mapping):
            value = {name: prepare_schema(child, strict=strict) for name, child in value.items()}
        elif keyword in SUBSCHEMA_LIST_KEYWORDS and isinstance(value, list):
            value = [prepare_schema(child, strict=strict) for child in value]
        elif keyword in SUBSCHEMA_KEYWORDS or keyword == "items":
            value = prepare_schema(value, strict=strict)
        prepared[keyword] = value

    if strict and _is_object_schema(schema) and "additionalProperties" not in schema:
        prepared["additionalProperties"] = False
    return prepared


def _bound_message(kind: str, limit: Any) -> str:
    match kind:
        case "minLength":
            return f"must NOT have fewer than {limit} characters"
        case "maxLength":
            return f"must NOT have more than {limit} characters"
        case "minItems":
            return f"must NOT have fewer than {limit} items"
        case "maxItems":
            return f"must NOT have more than {limit} items"
        case "minimum":
            return f"must be >= {limit}"
        case _:
            return f"must be <= {limit}"


def to_field_error(error: ValidationError) -> FieldError:
    """Convert a jsonschema error into a FieldError with a dotted path."""
    path = ".".join(str(part) for part in error.absolute_path)
    kind = str(error.validator)
    value = error.validator_value

    match kind:
        case "type":
            expected = value if isinstance(value, list) else [value]
            return FieldError(
                path, kind, f"must be {' | '.join(expected)}", {"expected": list(expected)}
            )
        case "enum":
            return FieldError(
                path,
                kind,
                "must be equal to one of the allowed values",
                {"allowed_values": list(value)},
            )
        case "pattern":
            return FieldError(path, kind, f'must match pattern "{value}"', {"pattern": value})
        case "format":
            return FieldError(path, kind, f'must match format "{value}"', {"format": value})
        case "minLength" | "maxLength" | "minItems" | "maxItems" | "minimum" | "maximum":
            return FieldError(path, kind, _bound_message(kind, value), {"limit": value})
        case "required" | "additionalProperties":
            return FieldError(path, kind, error.message, {"property": error.absolute_path[-1]})
        case _:
            return FieldError(path, kind, error.message)


class Validator:
    """Validates records against one compiled schema.

    The schema is never mutated, so one Validator can be reused for every
    record in a run.

    Args:
        schema: Compiled root schema node.
        allow_unknown: When False, properties not declared in the schema are
            reported as ``additionalProperties`` errors. A node declaring
            ``additionalProperties: false`` is strict either way.
    """

    def __init__(self, schema: SchemaNode, *, allow_unknown: bool = True) -> None:
        self.schema = schema
        self.allow_unknown = allow_unknown
        self._validator = RecordValidator(
            prepare_schema(schema.document, strict=not allow_unknown),
            format_checker=FORMAT_CHECKER,
        )

    def validate(self, record: Any, label: str = "") -> ValidationResult:
        """Validate one parsed record and return every violation found.

        A value of the wrong type gets a single ``type`` error; its other
        constraints are not reported.
        """
        errors: list[FieldError] = []
        mismatched: set[tuple[str | int, ...]] = set()

        for error in self._validator.iter_errors(record):
            location = tuple(error.absolute_path)
            if error.validator == "type":
                mismatched.add(location)
            elif location in mismatched:
                continue
            errors.append(to_field_error(error))

        return ValidationResult(label=label, errors=errors)

    def validate_file(self, path: Path) -> ValidationResult:
        """Load and validate one record file.

        A file that cannot be parsed yields a single ``parse`` error instead
        of raising, so callers can keep going with other records.
        """
        try:
            record = load_record(path)
        except RecordParseError as e:
            error = FieldError("", "parse", str(e), {"reason": e.reason})
            return ValidationResult(label=path.name, errors=[error])
        return self.validate(record, label=path.name)

    def validate_batch(self, paths: Iterable[Path]) -> BatchResult:
        """Validate every record file; earlier failures never stop the batch."""
        return BatchResult(results=[self.validate_file(path) for path in paths])
