"""CLI output utilities for consistent messaging.

Results go to stdout; errors and warnings go to stderr so ``--format json``
output stays parseable. Lines are never hard-wrapped, which keeps long file
paths intact.
"""

from rich.console import Console

_console = Console(soft_wrap=True)
_err_console = Console(stderr=True, soft_wrap=True)


def success(message: str) -> None:
    """Print a success message with green checkmark."""
    _console.print(f"[green]✓[/green] {message}")


def failure(message: str) -> None:
    """Print a failed result with red X to stdout."""
    _console.print(f"[red]✗[/red] {message}")


def error(message: str) -> None:
    """Print an error message with red X to stderr."""
    _err_console.print(f"[red]✗[/red] {message}")


def warning(message: str) -> None:
    """Print a warning message with yellow exclamation to stderr."""
    _err_console.print(f"[yellow]![/yellow] {message}")


def info(message: str) -> None:
    _console.print(message)


def dim(message: str) -> None:
    """Print a dimmed message for secondary info."""
    _console.print(f"[dim]{message}[/dim]")
