"""schemakit CLI entry point."""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from schemakit import __version__, cli_logger, exit_codes, report
from schemakit.config import DomainConfig, UnknownDomainError, get_domain, load_config
from schemakit.docs import render_markdown, write_docs
from schemakit.errors import ConfigError, SchemaError, handle_cli_error
from schemakit.home import get_project_root
from schemakit.records import discover_records
from schemakit.schema import SchemaNode, load_schema
from schemakit.validation import BatchResult
from schemakit.validator import Validator

app = typer.Typer(
    name="schemakit",
    help="Validate JSON content records against their schemas and generate schema docs.",
    no_args_is_help=True,
)

console = Console()


class OutputFormat(str, Enum):
    """How validation results are printed."""

    CONSOLE = "console"
    JSON = "json"


StrictOption = Annotated[
    bool,
    typer.Option(
        "--strict",
        help="Report properties that are not declared in the schema.",
    ),
]

FormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format for results.",
    ),
]


def require_domain(name: str) -> tuple[Path, DomainConfig]:
    """Resolve the project root and look up a configured domain.

    Returns:
        Tuple of (project_root, domain_config).

    Raises:
        typer.Exit: With INVALID_ARGS for an unknown domain.
        typer.Exit: With GENERAL_ERROR if the configuration is invalid.
    """
    root = get_project_root()
    try:
        config = load_config(root)
        return root, get_domain(config, name)
    except UnknownDomainError as e:
        cli_logger.error(escape(str(e)))
        raise typer.Exit(exit_codes.INVALID_ARGS) from e
    except ConfigError as e:
        raise typer.Exit(handle_cli_error(e)) from e


def require_schema(path: Path) -> SchemaNode:
    """Load a schema file, aborting the command if it is unusable.

    Raises:
        typer.Exit: With GENERAL_ERROR if the schema cannot be loaded.
    """
    try:
        return load_schema(path)
    except SchemaError as e:
        raise typer.Exit(handle_cli_error(e)) from e


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        cli_logger.info(f"schemakit v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show schemakit version and exit.",
    ),
) -> None:
    """Validate JSON content records against their schemas and generate schema docs."""


@app.command("validate-records")
def validate_records(
    domain: Annotated[
        str,
        typer.Argument(help="Domain whose record directory is validated."),
    ] = "plugins",
    strict: StrictOption = False,
    output_format: FormatOption = OutputFormat.CONSOLE,
) -> None:
    """Validate every record file of a domain against its schema.

    Every record is checked even when earlier ones fail. Exits 1 if any
    record fails or if the schema or record directory cannot be read.
    """
    root, config = require_domain(domain)
    records_dir = config.records_dir(root)
    if records_dir is None:
        cli_logger.error(
            f"Domain '{domain}' validates a single document; use [bold]validate-document[/bold]"
        )
        raise typer.Exit(exit_codes.INVALID_ARGS)

    schema_path = config.schema_file(root)
    schema = require_schema(schema_path)
    if output_format == OutputFormat.CONSOLE:
        cli_logger.dim(f"Schema loaded from {escape(schema_path.name)}")

    try:
        paths = discover_records(records_dir, exclude=(schema_path.name,))
    except ConfigError as e:
        raise typer.Exit(handle_cli_error(e)) from e

    if not paths:
        if output_format == OutputFormat.JSON:
            typer.echo(report.batch_to_json(BatchResult()))
        else:
            cli_logger.warning(f"No {config.noun} files found to validate")
        raise typer.Exit(exit_codes.SUCCESS)

    if output_format == OutputFormat.CONSOLE:
        cli_logger.info(f"Validating {len(paths)} {config.noun} file(s)...")

    batch = Validator(schema, allow_unknown=not strict).validate_batch(paths)

    if output_format == OutputFormat.JSON:
        typer.echo(report.batch_to_json(batch))
    else:
        report.print_batch(batch, config.noun)

    raise typer.Exit(batch.exit_code)


@app.command("validate-document")
def validate_document(
    domain: Annotated[
        str,
        typer.Argument(help="Domain whose single document is validated."),
    ] = "roadmap",
    strict: StrictOption = False,
    output_format: FormatOption = OutputFormat.CONSOLE,
) -> None:
    """Validate a domain's single document against its schema.

    Every violation is listed before exiting. Exits 1 on any violation or
    if the schema or document cannot be read.
    """
    root, config = require_domain(domain)
    record_path = config.record_file(root)
    if record_path is None:
        cli_logger.error(
            f"Domain '{domain}' validates a record directory; use [bold]validate-records[/bold]"
        )
        raise typer.Exit(exit_codes.INVALID_ARGS)

    schema = require_schema(config.schema_file(root))

    if not record_path.is_file():
        error = ConfigError(f"Document '{record_path}' does not exist")
        raise typer.Exit(handle_cli_error(error))

    if output_format == OutputFormat.CONSOLE:
        cli_logger.info(f"Validating {escape(record_path.name)}")

    result = Validator(schema, allow_unknown=not strict).validate_file(record_path)

    if output_format == OutputFormat.JSON:
        typer.echo(report.result_to_json(result))
    else:
        report.print_document(result)

    raise typer.Exit(BatchResult(results=[result]).exit_code)


@app.command("generate-docs")
def generate_docs(
    domain: Annotated[
        str,
        typer.Argument(help="Domain whose schema is documented."),
    ] = "plugins",
    timestamp: Annotated[
        bool,
        typer.Option(
            "--timestamp/--no-timestamp",
            help="Append a 'Last updated' line to the document.",
        ),
    ] = True,
) -> None:
    """Generate markdown reference documentation from a domain's schema."""
    root, config = require_domain(domain)
    docs_path = config.docs_file(root)
    if docs_path is None:
        cli_logger.error(f"Domain '{domain}' has no docs output path configured")
        raise typer.Exit(exit_codes.INVALID_ARGS)

    schema_path = config.schema_file(root)
    schema = require_schema(schema_path)

    markdown = render_markdown(
        schema,
        title=config.title,
        schema_name=schema_path.name,
        regenerate_command=f"schemakit generate-docs {domain}",
        generated_at=datetime.now(timezone.utc) if timestamp else None,
    )

    try:
        write_docs(docs_path, markdown)
    except OSError as e:
        raise typer.Exit(handle_cli_error(e)) from e

    cli_logger.success("Documentation generated successfully!")
    cli_logger.dim(f"Output: {escape(str(docs_path))}")
    raise typer.Exit(exit_codes.SUCCESS)


@app.command()
def domains() -> None:
    """List configured data domains."""
    root = get_project_root()
    try:
        config = load_config(root)
    except ConfigError as e:
        raise typer.Exit(handle_cli_error(e)) from e

    table = Table()
    table.add_column("DOMAIN", style="cyan")
    table.add_column("SCHEMA")
    table.add_column("RECORDS")
    table.add_column("DOCS")

    for name, domain in config.domains.items():
        records = domain.records if domain.records is not None else domain.record
        table.add_row(
            name,
            str(domain.schema_path),
            str(records),
            str(domain.docs) if domain.docs is not None else "-",
        )

    console.print(table)
    raise typer.Exit(exit_codes.SUCCESS)
