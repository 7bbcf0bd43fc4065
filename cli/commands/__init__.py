"""CLI command modules for the Teevi toolkit."""

from cli.commands.capabilities import capabilities_app

__all__ = ["capabilities_app"]
