"""Data-domain configuration using Pydantic.

A domain ties a schema file to the records it governs and to the generated
documentation. The built-in domains match the website's data layout; an
optional schemakit.yaml at the project root overrides or extends them.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from schemakit.errors import ConfigError, format_validation_errors

CONFIG_FILENAME = "schemakit.yaml"


class DomainConfig(BaseModel):
    """Locations for one data domain, relative to the project root."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_path: Path = Field(alias="schema", description="Path to the JSON schema file")
    records: Path | None = Field(
        default=None,
        description="Directory with one JSON file per record",
    )
    record: Path | None = Field(
        default=None,
        description="Single JSON document validated on its own",
    )
    docs: Path | None = Field(
        default=None,
        description="Where generated markdown documentation is written",
    )
    title: str | None = Field(
        default=None,
        description="Title of the generated documentation",
    )
    noun: str = Field(
        default="record",
        description="What a record is called in console output",
    )

    @model_validator(mode="after")
    def validate_single_record_source(self) -> "DomainConfig":
        """Validate that exactly one of records/record is set."""
        if (self.records is None) == (self.record is None):
            msg = "exactly one of 'records' or 'record' must be set"
            raise ValueError(msg)
        return self

    def schema_file(self, root: Path) -> Path:
        return root / self.schema_path

    def records_dir(self, root: Path) -> Path | None:
        return root / self.records if self.records is not None else None

    def record_file(self, root: Path) -> Path | None:
        return root / self.record if self.record is not None else None

    def docs_file(self, root: Path) -> Path | None:
        return root / self.docs if self.docs is not None else None


class ProjectConfig(BaseModel):
    """Root schema for schemakit.yaml files."""

    model_config = ConfigDict(extra="forbid")

    domains: dict[str, DomainConfig] = Field(
        default_factory=dict,
        description="Data domains by name",
    )


DEFAULT_DOMAINS: dict[str, DomainConfig] = {
    "plugins": DomainConfig(
        schema_path=Path("src/data/plugins/schema.json"),
        records=Path("src/data/plugins"),
        docs=Path("src/data/plugins/SCHEMA.md"),
        title="Plugin Schema Documentation",
        noun="plugin",
    ),
    "packs": DomainConfig(
        schema_path=Path("src/data/intelligence-packs/schema.json"),
        records=Path("src/data/intelligence-packs"),
        docs=Path("src/data/intelligence-packs/SCHEMA.md"),
        title="Intelligence Pack Schema Documentation",
        noun="intelligence pack",
    ),
    "roadmap": DomainConfig(
        schema_path=Path("src/data/roadmap.schema.json"),
        record=Path("src/data/roadmap.json"),
        docs=Path("src/data/ROADMAP_SCHEMA.md"),
        title="Roadmap Schema Documentation",
        noun="roadmap",
    ),
}


class UnknownDomainError(ConfigError):
    """Raised when a requested domain is not configured."""

    def __init__(self, name: str, available: list[str]) -> None:
        """Initialize with the unknown name and the configured names."""
        self.name = name
        self.available = available
        super().__init__(f"Unknown domain '{name}' (available: {', '.join(available)})")


def load_config(root: Path) -> ProjectConfig:
    """Load the project configuration.

    Domains from schemakit.yaml replace built-in domains of the same name;
    the rest of the built-in domains stay available.

    Args:
        root: Project root directory.

    Returns:
        The effective ProjectConfig.

    Raises:
        ConfigError: If schemakit.yaml cannot be read, is not valid YAML, or
            fails validation.
    """
    config_path = root / CONFIG_FILENAME
    domains = dict(DEFAULT_DOMAINS)

    if not config_path.exists():
        return ProjectConfig(domains=domains)

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read '{config_path}': {e}"
        raise ConfigError(msg) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in '{config_path}': {e}"
        raise ConfigError(msg) from e

    if data is None:
        return ProjectConfig(domains=domains)

    try:
        loaded = ProjectConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config '{config_path}': {format_validation_errors(e)}"
        raise ConfigError(msg) from e

    domains.update(loaded.domains)
    return ProjectConfig(domains=domains)


def get_domain(config: ProjectConfig, name: str) -> DomainConfig:
    """Look up a domain by name.

    Raises:
        UnknownDomainError: If no domain with that name is configured.
    """
    domain = config.domains.get(name)
    if domain is None:
        raise UnknownDomainError(name, sorted(config.domains))
    return domain
