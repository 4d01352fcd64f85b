"""String ``format`` checks used during record validation.

Only the formats used by the content schemas are registered; any other
format name is accepted without checking. Non-string values always pass,
since ``format`` only constrains strings.
"""

import re

from jsonschema import FormatChecker

URI_PATTERN = re.compile(r"^https?://.+", re.IGNORECASE)
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATE_TIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,3})?Z$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

FORMAT_CHECKER = FormatChecker(formats=())


@FORMAT_CHECKER.checks("uri")
def is_uri(instance: object) -> bool:
    """Accept absolute http(s) URLs."""
    if not isinstance(instance, str):
        return True
    return URI_PATTERN.match(instance) is not None


@FORMAT_CHECKER.checks("date")
def is_date(instance: object) -> bool:
    if not isinstance(instance, str):
        return True
    return DATE_PATTERN.match(instance) is not None


@FORMAT_CHECKER.checks("date-time")
def is_date_time(instance: object) -> bool:
    """Accept UTC timestamps such as ``2026-01-23T12:30:00.000Z``."""
    if not isinstance(instance, str):
        return True
    return DATE_TIME_PATTERN.match(instance) is not None


@FORMAT_CHECKER.checks("email")
def is_email(instance: object) -> bool:
    if not isinstance(instance, str):
        return True
    return EMAIL_PATTERN.match(instance) is not None
