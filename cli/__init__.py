"""Command-line tools for the Teevi toolkit."""
