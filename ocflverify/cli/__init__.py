"""CLI package — Typer app and command modules."""
