"""Data record discovery and loading.

Records are JSON files, one per record. File names only serve as labels
in reports.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from schemakit.errors import ConfigError, RecordParseError

SCHEMA_FILENAME = "schema.json"


def discover_records(directory: Path, exclude: Iterable[str] = (SCHEMA_FILENAME,)) -> list[Path]:
    """List the record files in a directory.

    Args:
        directory: Directory holding one JSON file per record.
        exclude: File names to skip (the schema file when it lives alongside).

    Returns:
        Record file paths sorted by name.

    Raises:
        ConfigError: If the directory does not exist or cannot be read.
    """
    if not directory.is_dir():
        msg = f"Records directory '{directory}' does not exist"
        raise ConfigError(msg)

    excluded = set(exclude)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        msg = f"Failed to read records directory '{directory}': {e.strerror or e}"
        raise ConfigError(msg) from e

    return sorted(
        (path for path in entries if path.suffix == ".json" and path.name not in excluded and path.is_file()),
        key=lambda path: path.name,
    )


def load_record(path: Path) -> Any:
    """Read and parse one record file.

    Raises:
        RecordParseError: If the file cannot be read or is not valid JSON.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RecordParseError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise RecordParseError(path, str(e)) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise RecordParseError(path, str(e)) from e
