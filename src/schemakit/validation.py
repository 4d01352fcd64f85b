"""Validation result types for schemakit.

Results are plain data: rendering them (console, JSON) and deriving the
process exit code are separate, pure steps.
"""

from dataclasses import dataclass, field
from typing import Any

from schemakit import exit_codes


@dataclass
class FieldError:
    """A single constraint violation inside a record.

    Attributes:
        path: Dot-delimited pointer into the record ("" for the whole record).
        kind: Constraint kind that failed ("required", "enum", "pattern", ...).
        message: Human-readable description of the failure.
        details: Constraint-specific payload (allowed values, pattern, limit).
    """

    path: str
    kind: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind,
            "message": self.message,
            "details": self.details,
        }


@dataclass
class ValidationResult:
    """Result of validating one record.

    Attributes:
        label: Human-readable record name (usually the file name).
        errors: Every violation found, in traversal order.
    """

    label: str
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "record": self.label,
            "valid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
        }


@dataclass
class BatchResult:
    """Aggregate result of validating a set of records."""

    results: list[ValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.is_valid)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if not result.is_valid)

    @property
    def total_errors(self) -> int:
        return sum(len(result.errors) for result in self.results)

    @property
    def is_valid(self) -> bool:
        """Return True if every record passed (an empty batch passes)."""
        return self.failed == 0

    @property
    def exit_code(self) -> int:
        return exit_codes.SUCCESS if self.is_valid else exit_codes.VALIDATION_FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": {
                "passed": self.passed,
                "failed": self.failed,
                "errors": self.total_errors,
            },
            "records": [result.to_dict() for result in self.results],
        }
