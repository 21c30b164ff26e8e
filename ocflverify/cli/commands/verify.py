"""``ocflverify verify ID CHECKSUMS`` — verify an object from the command line.

Reads a JSON object of ``path -> checksum`` and runs ingest (default) or
update verification against the configured object store.  Exit codes:
0 verified, 1 verification failed, 2 request-level error.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ocflverify.cli.wiring import build_verifier
from ocflverify.core.errors import OcflVerifyError
from ocflverify.core.verifier import VerificationFailed
from ocflverify.store.base import ObjectStoreError

console = Console()


def _load_checksums(path: Path) -> dict[str, str]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        console.print(f"[bold red]Cannot read checksums:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    if not isinstance(payload, dict) or not all(
        isinstance(v, str) for v in payload.values()
    ):
        console.print("[bold red]Checksums must be a JSON object of path -> checksum.[/bold red]")
        raise typer.Exit(code=2)
    return payload


def verify_cmd(
    object_id: int = typer.Argument(..., min=0, help="Object identifier."),
    checksums: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="JSON file mapping logical path to expected checksum.",
    ),
    update: bool = typer.Option(
        False,
        "--update",
        "-u",
        help="Only check the supplied paths (update mode).",
    ),
) -> None:
    """Verify stored digests of an OCFL object against expected checksums."""
    expected = _load_checksums(checksums)
    verifier = build_verifier()
    mode = "update" if update else "ingest"

    try:
        if update:
            verifier.verify_update(object_id, expected)
        else:
            verifier.verify_ingest(object_id, expected)
    except VerificationFailed as exc:
        table = Table(title=f"Object {object_id}: {mode} verification failed")
        table.add_column("Path", style="cyan")
        table.add_column("Error", style="red")
        table.add_column("Expected")
        table.add_column("Actual")
        for path, error in sorted(exc.errors.items()):
            table.add_row(path, error.error, error.expected or "", error.actual or "")
        console.print(table)
        raise typer.Exit(code=1) from exc
    except (OcflVerifyError, ObjectStoreError) as exc:
        console.print(f"[bold red]{mode.capitalize()} verification aborted:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    console.print(
        f"[bold green]Object {object_id} verified[/bold green] "
        f"({len(expected)} path(s), {mode} mode)"
    )
