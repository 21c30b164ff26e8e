"""Main Typer application — imports and registers all CLI commands.

Entry point: ``ocflverify`` (configured via pyproject.toml scripts).

Commands: serve, verify, inventory, key.
"""

from __future__ import annotations

import typer

from ocflverify.cli.commands.inventory import inventory_cmd
from ocflverify.cli.commands.verify import verify_cmd
from ocflverify.config import config
from ocflverify.logging_setup import setup_logging

app = typer.Typer(
    name="ocflverify",
    help="Verify OCFL objects in an object store against expected checksums.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Override the configured log level."
    ),
) -> None:
    """Configure logging before any command runs."""
    setup_logging(log_level or config.log_level)


# Register subcommands
app.command(name="verify", help="Verify an object against a checksum file.")(verify_cmd)
app.command(name="inventory", help="Summarize an object's inventory.")(inventory_cmd)


@app.command(name="key", help="Print the object-store key for an object path.")
def key_cmd(
    object_id: int = typer.Argument(..., min=0, help="Object identifier."),
    path: str = typer.Argument(config.inventory_name, help="Path within the object."),
) -> None:
    """Print the sharded object-store key for PATH in object OBJECT_ID."""
    from ocflverify.core.keys import build_key

    typer.echo(build_key(object_id, path))


@app.command(name="serve", help="Run the HTTP verification service.")
def serve_cmd(
    host: str = typer.Option(config.host, help="Bind address."),
    port: int = typer.Option(config.port, help="Bind port."),
) -> None:
    """Serve POST /verify/{id} and POST /verify/{id}/update."""
    import uvicorn

    from ocflverify.server.app import create_app_from_config

    uvicorn.run(create_app_from_config(config), host=host, port=port, log_config=None)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
