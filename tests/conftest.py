"""Shared test fixtures for schemakit tests."""

import copy
import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

PLUGIN_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Plugin",
    "description": "Schema for plugin manifest files.",
    "type": "object",
    "required": ["id", "name", "version", "category", "status"],
    "properties": {
        "id": {
            "type": "string",
            "description": "Unique plugin identifier in kebab-case.",
            "pattern": "^[a-z0-9]+(-[a-z0-9]+)*$",
            "minLength": 3,
            "maxLength": 50,
            "examples": ["financial-analysis"],
        },
        "name": {
            "type": "string",
            "description": "Display name.",
            "minLength": 1,
            "maxLength": 100,
        },
        "version": {
            "type": "string",
            "pattern": "^\\d+\\.\\d+\\.\\d+$",
            "examples": ["1.0.0"],
        },
        "category": {
            "type": "string",
            "enum": ["finance", "analytics", "other"],
        },
        "status": {
            "type": "string",
            "enum": ["active", "coming-soon", "beta"],
            "default": "coming-soon",
        },
        "rating": {
            "type": "number",
            "minimum": 0,
            "maximum": 5,
        },
        "features": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "minItems": 1,
        },
        "links": {
            "type": "object",
            "description": "External links.",
            "required": ["documentation"],
            "properties": {
                "documentation": {"type": "string", "format": "uri"},
                "repository": {"type": "string", "format": "uri"},
            },
        },
        "quickstart": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["step", "title"],
                "properties": {
                    "step": {"type": "integer", "minimum": 1},
                    "title": {"type": "string"},
                },
            },
        },
        "sourceCode": {
            "type": ["boolean", "null"],
            "default": None,
        },
    },
}

VALID_PLUGIN: dict[str, Any] = {
    "id": "my-plugin",
    "name": "My Plugin",
    "version": "1.0.0",
    "category": "finance",
    "status": "active",
    "rating": 4.5,
    "features": ["Real-time market data"],
    "links": {"documentation": "https://docs.example.com"},
    "quickstart": [{"step": 1, "title": "Initialize the plugin"}],
    "sourceCode": True,
}


def plugin_schema() -> dict[str, Any]:
    """Return a fresh copy of the sample plugin schema."""
    return copy.deepcopy(PLUGIN_SCHEMA)


def valid_plugin(**overrides: Any) -> dict[str, Any]:
    """Return a fresh valid plugin record with optional field overrides."""
    record = copy.deepcopy(VALID_PLUGIN)
    record.update(overrides)
    return record


def write_json(path: Path, data: Any) -> Path:
    """Write data as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a project root with the plugin schema in place.

    Sets SCHEMAKIT_ROOT so the CLI resolves paths inside tmp_path.
    """
    monkeypatch.setenv("SCHEMAKIT_ROOT", str(tmp_path))
    write_json(tmp_path / "src" / "data" / "plugins" / "schema.json", plugin_schema())
    return tmp_path


@pytest.fixture
def plugins_dir(project_root: Path) -> Path:
    """Return the plugins records directory of the project root."""
    return project_root / "src" / "data" / "plugins"
