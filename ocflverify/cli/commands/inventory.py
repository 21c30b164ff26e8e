"""``ocflverify inventory ID`` — summarize an object's OCFL inventory."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from ocflverify.cli.wiring import build_loader
from ocflverify.core.errors import OcflVerifyError
from ocflverify.core.keys import reduce_key
from ocflverify.store.base import ObjectStoreError

console = Console()


def inventory_cmd(
    object_id: int = typer.Argument(..., min=0, help="Object identifier."),
    manifest: bool = typer.Option(
        False,
        "--manifest",
        "-m",
        help="Also list every manifest location with its logical path.",
    ),
) -> None:
    """Show the head, versions and manifest size of an object's inventory."""
    loader = build_loader()
    try:
        inventory = loader.load(object_id)
    except (OcflVerifyError, ObjectStoreError) as exc:
        console.print(f"[bold red]Cannot load inventory:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    console.print(f"[bold]Inventory[/bold] {inventory.id}  [dim]{loader.key_for(object_id)}[/dim]")
    console.print(
        f"  head=[cyan]{inventory.head}[/cyan]  "
        f"digest={inventory.digest_algorithm}  "
        f"contentDirectory={inventory.content_directory}  "
        f"manifest entries={len(inventory.manifest)}"
    )

    table = Table(title="Versions")
    table.add_column("Version", style="cyan")
    table.add_column("Created")
    table.add_column("Paths", justify="right")
    table.add_column("Message")
    for label in inventory.version_labels():
        version = inventory.versions[label]
        table.add_row(label, version.created, str(len(version.paths())), version.message)
    console.print(table)

    if manifest:
        locations = Table(title="Manifest")
        locations.add_column("Location", style="cyan")
        locations.add_column("Logical path")
        locations.add_column("Digest", style="dim")
        for digest, entries in inventory.manifest.items():
            for location in entries:
                locations.add_row(
                    location,
                    reduce_key(inventory.content_directory, location),
                    digest[:16],
                )
        console.print(locations)
