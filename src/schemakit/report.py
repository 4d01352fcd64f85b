"""Rendering of validation results.

Console output goes through cli_logger; JSON output is a plain string the
CLI prints verbatim. Neither decides the exit code.
"""

import json
from collections.abc import Callable

from rich.markup import escape

from schemakit import cli_logger
from schemakit.validation import BatchResult, FieldError, ValidationResult

# Constraint kinds whose "limit" is a lower or an upper bound
LOWER_BOUNDS = {"minLength", "minimum", "minItems"}
UPPER_BOUNDS = {"maxLength", "maximum", "maxItems"}


def format_field_error(error: FieldError) -> str:
    """Format one FieldError as a single plain-text line."""
    output = f"{error.kind}"
    if error.path:
        output += f" at {error.path}"
    output += f": {error.message}"

    details = error.details
    if "allowed_values" in details:
        allowed = ", ".join(str(value) for value in details["allowed_values"])
        output += f" (allowed: {allowed})"
    if error.kind == "pattern":
        output += f" (pattern: {details['pattern']})"
    if "limit" in details:
        if error.kind in LOWER_BOUNDS:
            output += f" (minimum: {details['limit']})"
        elif error.kind in UPPER_BOUNDS:
            output += f" (maximum: {details['limit']})"

    return output


def print_errors(
    errors: list[FieldError], emit: Callable[[str], None] = cli_logger.failure
) -> None:
    for error in errors:
        emit(f"  {escape(format_field_error(error))}")


def print_result(result: ValidationResult) -> None:
    """Print the pass/fail line for one record, followed by its errors."""
    if result.is_valid:
        cli_logger.success(escape(result.label))
        return

    cli_logger.failure(escape(result.label))
    print_errors(result.errors)
    cli_logger.info("")


def print_batch(batch: BatchResult, noun: str = "record") -> None:
    """Print per-record lines and the aggregate summary for a batch."""
    for result in batch.results:
        print_result(result)

    cli_logger.info("---")
    cli_logger.info("[bold]Validation Summary:[/bold]")
    cli_logger.info(f"  Passed: {batch.passed}")
    cli_logger.info(f"  Failed: {batch.failed}")
    cli_logger.info(f"  Errors: {batch.total_errors}")
    cli_logger.info("")

    if batch.is_valid:
        cli_logger.success(f"All {noun}s validated successfully!")
    else:
        cli_logger.error("Validation failed. Please fix the errors above.")


def print_document(result: ValidationResult) -> None:
    """Print the outcome of validating a single document."""
    if result.is_valid:
        cli_logger.success(f"{escape(result.label)} validated successfully!")
        return

    cli_logger.error(
        f"{escape(result.label)} validation failed with {len(result.errors)} error(s):"
    )
    print_errors(result.errors, emit=cli_logger.error)


def batch_to_json(batch: BatchResult) -> str:
    return json.dumps(batch.to_dict(), indent=2, ensure_ascii=False)


def result_to_json(result: ValidationResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
