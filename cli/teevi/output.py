"""Rich console output utilities for the Teevi CLI."""

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from extensions.manifest import Manifest

console = Console()
error_console = Console(stderr=True)

TAG = "[cyan]teevi[/cyan]"


def configure_logging(level: str = "INFO") -> None:
    """Route library log records through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"{TAG} [green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"{TAG} [red]✗ {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"{TAG} [yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"{TAG} {message}")


def print_json(data: Any) -> None:
    """Print formatted JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))


def print_manifest(manifest: Manifest) -> None:
    """Print a manifest summary as a table."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    # Every value comes from the author's files.
    table.add_row("id", escape(manifest.id))
    table.add_row("name", escape(manifest.name))
    table.add_row("version", escape(manifest.version))
    table.add_row("author", escape(manifest.author))
    table.add_row("capabilities", escape(", ".join(manifest.capability_values)))
    table.add_row("hash", f"[dim]{manifest.hash}[/dim]")
    if manifest.inputs:
        table.add_row("inputs", escape(", ".join(i.id for i in manifest.inputs)))
    if manifest.sdk_version:
        table.add_row("sdk", escape(manifest.sdk_version))

    console.print(table)
