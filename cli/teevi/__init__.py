"""Teevi CLI.

Command-line interface for packaging Teevi extensions.
"""

from pipeline import __version__

from cli.teevi.cli import app, main

__all__ = ["__version__", "app", "main"]
