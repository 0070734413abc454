"""``assetregistry register | show | list`` — create and read assets."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from assetregistry.cli.commands._common import (
    DB_OPTION_HELP,
    console,
    open_registry,
    registry_errors,
    render_asset,
    status_markup,
)
from assetregistry.core.hasher import sha256_file
from assetregistry.models.assets import AssetMetadata, AssetType


def register_cmd(
    title: str = typer.Argument(..., help="Asset title (max 100 characters)."),
    creator_id: str = typer.Option(..., "--creator", "-c", help="Creator UUID."),
    asset_type: AssetType = typer.Option(..., "--type", "-t", help="Asset type."),
    content_hash: str = typer.Option(
        None, "--hash", help="SHA-256 hex digest of the content."
    ),
    file: Path = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False,
        help="Hash this file instead of passing --hash.",
    ),
    description: str = typer.Option("", "--description", "-d"),
    file_format: str = typer.Option(None, "--format", help="File format, e.g. png."),
    file_size: int = typer.Option(None, "--size", help="File size in bytes."),
    dimensions: str = typer.Option(None, "--dimensions"),
    duration: float = typer.Option(None, "--duration", help="Duration in seconds."),
    tags: list[str] = typer.Option([], "--tag", help="Additional tag (repeatable)."),
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Register a new digital asset."""
    if file is not None:
        content_hash = sha256_file(file)
        file_format = file_format or file.suffix.lstrip(".") or "bin"
        file_size = file_size if file_size is not None else file.stat().st_size
    if not content_hash:
        console.print("[bold red]Provide --hash or --file.[/bold red]")
        raise typer.Exit(code=1)

    metadata = AssetMetadata(
        file_format=file_format or "unknown",
        file_size=file_size or 0,
        dimensions=dimensions,
        duration=duration,
        additional_tags=tags,
    )

    with open_registry(db) as registry, registry_errors():
        asset = registry.create_asset(
            title=title,
            description=description,
            asset_type=asset_type,
            creator_id=creator_id,
            content_hash=content_hash,
            metadata=metadata,
        )

    render_asset(asset, title="Asset registered")
    # Print the id plainly for scripting
    console.print(f"[bold]{asset.id}[/bold]")


def show_cmd(
    asset_id: str = typer.Argument(..., help="Asset ID."),
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Show one asset and its transfer history."""
    with open_registry(db) as registry, registry_errors():
        asset = registry.get_asset(asset_id)
    render_asset(asset)


def list_cmd(
    creator_id: str = typer.Argument(..., help="Creator UUID."),
    page: int = typer.Option(1, "--page", "-p", min=1),
    limit: int = typer.Option(10, "--limit", "-n", min=1),
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """List the assets a creator currently owns."""
    with open_registry(db) as registry, registry_errors():
        result = registry.get_assets_by_creator(creator_id, page=page, limit=limit)

    if not result.assets:
        console.print(
            f"[dim]No assets on page {result.page} "
            f"(creator owns {result.total}).[/dim]"
        )
        return

    table = Table(
        title=f"Assets of {creator_id} (page {result.page}, {result.total} total)"
    )
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Type")
    table.add_column("Status", justify="center")
    table.add_column("Transfers", justify="right")
    for asset in result.assets:
        table.add_row(
            asset.id,
            asset.title,
            asset.asset_type.value,
            status_markup(asset.status),
            str(len(asset.transfer_history)),
        )
    console.print(table)
