"""Capabilities CLI commands for the Teevi toolkit.

Inspect the methods a host calls for each capability.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

capabilities_app = typer.Typer(
    name="capabilities",
    help="Inspect capability contracts.",
)


@capabilities_app.command("list")
def list_capabilities(
    surface: Optional[str] = typer.Option(
        None,
        "--surface",
        "-s",
        help="Capability surface generation (default: current)",
    ),
) -> None:
    """List the methods each capability exposes.

    Examples:
        teevi capabilities list
        teevi capabilities list --surface 2
    """
    from extensions.capabilities import (
        CURRENT_SURFACE,
        Capability,
        deprecated_methods,
        methods_for,
    )

    surface = surface or CURRENT_SURFACE
    try:
        deprecated = deprecated_methods(surface)
    except KeyError as e:
        console.print(f"[red]{escape(str(e.args[0]))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Capability Surface {surface}")
    table.add_column("Capability", style="cyan")
    table.add_column("Methods")

    for capability in Capability:
        methods = methods_for(capability, surface)
        if not methods:
            table.add_row(capability.value, "[dim]not available[/dim]")
            continue
        names = [
            f"[yellow]{m}[/yellow] [dim](deprecated: use {deprecated[m]})[/dim]"
            if m in deprecated
            else m
            for m in methods
        ]
        table.add_row(capability.value, "\n".join(names))

    console.print(table)


@capabilities_app.command("show")
def show(
    manifest_path: Path = typer.Argument(..., help="Path to a published manifest.json"),
    surface: Optional[str] = typer.Option(
        None,
        "--surface",
        "-s",
        help="Capability surface generation (default: current)",
    ),
) -> None:
    """Show how a host dispatches calls for a published extension.

    Example:
        teevi capabilities show dist/manifest.json
    """
    from extensions.capabilities import CURRENT_SURFACE, dispatch_table
    from extensions.manifest import Manifest, ManifestError

    try:
        manifest = Manifest.from_json(manifest_path)
        table_data = dispatch_table(manifest.capabilities, surface or CURRENT_SURFACE)
    except ManifestError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except KeyError as e:
        console.print(f"[red]{escape(str(e.args[0]))}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold cyan]{escape(manifest.name)}[/bold cyan] v{escape(manifest.version)}")
    console.print(f"[dim]{escape(manifest.id)}[/dim]\n")

    for tag, methods in table_data.items():
        if methods:
            console.print(f"[bold]{escape(tag)}[/bold]: {', '.join(methods)}")
        else:
            console.print(f"[bold]{escape(tag)}[/bold]: [yellow]passthrough[/yellow]")
