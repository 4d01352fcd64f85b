"""Error types and formatting utilities for schemakit.

Provides the exception hierarchy for fatal configuration problems and
clean, user-friendly error messages from Pydantic validation errors.
"""

import json
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.markup import escape

from schemakit import cli_logger, exit_codes

# Pydantic type-error codes and the JSON kind they expected
EXPECTED_TYPES = {
    "string_type": "string",
    "list_type": "list",
    "dict_type": "object",
    "int_type": "integer",
    "float_type": "number",
    "bool_type": "boolean",
}


class SchemakitError(Exception):
    """Base class for schemakit errors."""


class SchemaError(SchemakitError):
    """Raised when a schema file is missing, unparsable, or malformed.

    Always fatal: reported once before any record is checked.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        """Initialize with the schema location and the reason it was rejected."""
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid schema '{path}': {reason}")


class ConfigError(SchemakitError):
    """Raised when configuration or a required data location is unusable."""


class RecordParseError(SchemakitError):
    """Raised when a single record file cannot be read or parsed as JSON.

    Isolated to that record; batch validation continues.
    """

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize with the record path and the parse failure."""
        self.path = path
        self.reason = reason
        super().__init__(f"JSON Parse Error: {reason}")


def format_validation_errors(error: ValidationError) -> str:
    """Format a Pydantic ValidationError as one line of CLI text.

    Each problem becomes ``'location': reason``, joined with ``; ``. Pydantic
    URLs and input echoes are dropped.
    """
    messages = []

    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        error_type = err["type"]

        if error_type in EXPECTED_TYPES:
            reason = f"expected {EXPECTED_TYPES[error_type]}"
        elif error_type == "missing":
            reason = "field is required"
        elif error_type == "extra_forbidden":
            reason = "unknown key"
        elif error_type == "value_error":
            # model_validator failures carry a "Value error, " prefix
            reason = err["msg"].removeprefix("Value error, ")
        else:
            reason = err["msg"].lower()

        messages.append(f"'{loc}': {reason}" if loc else reason)

    return "; ".join(messages)


def handle_cli_error(error: Exception) -> int:
    """Handle an exception at the CLI boundary.

    Formats the error into a clean user-friendly message and returns
    an appropriate exit code, so raw tracebacks never reach the user.

    Args:
        error: The exception to handle.

    Returns:
        An exit code from exit_codes.
    """
    if isinstance(error, SchemaError):
        cli_logger.error(f"Failed to load schema: {escape(str(error))}")
        return exit_codes.GENERAL_ERROR

    if isinstance(error, ConfigError):
        cli_logger.error(f"Configuration error: {escape(str(error))}")
        return exit_codes.GENERAL_ERROR

    if isinstance(error, ValidationError):
        cli_logger.error(f"Invalid configuration: {escape(format_validation_errors(error))}")
        return exit_codes.GENERAL_ERROR

    if isinstance(error, OSError):
        if error.filename:
            cli_logger.error(f"{error.strerror}: {escape(str(error.filename))}")
        else:
            cli_logger.error(escape(str(error)))
        return exit_codes.GENERAL_ERROR

    if isinstance(error, yaml.YAMLError):
        cli_logger.error(f"Invalid YAML: {escape(str(error))}")
        return exit_codes.GENERAL_ERROR

    if isinstance(error, json.JSONDecodeError):
        cli_logger.error(f"Invalid JSON: {escape(str(error))}")
        return exit_codes.GENERAL_ERROR

    cli_logger.error(f"Unexpected error: {escape(str(error))}")
    return exit_codes.GENERAL_ERROR
