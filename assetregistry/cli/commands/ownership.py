"""``assetregistry transfer | update-metadata | revoke | delete`` — owner actions.

Each command acts as ``--actor``, which must be the asset's current owner.
"""

from __future__ import annotations

from pathlib import Path

import typer

from assetregistry.cli.commands._common import (
    DB_OPTION_HELP,
    console,
    open_registry,
    registry_errors,
    render_asset,
)
from assetregistry.models.assets import MetadataUpdate, TransferType

ACTOR_HELP = "UUID of the acting owner."


def transfer_cmd(
    asset_id: str = typer.Argument(..., help="Asset ID."),
    to_id: str = typer.Argument(..., help="Recipient creator UUID."),
    actor: str = typer.Option(..., "--actor", "-a", help=ACTOR_HELP),
    transfer_type: TransferType = typer.Option(
        TransferType.FULL, "--type", "-t",
        help="FULL moves ownership; LICENSE only records the grant.",
    ),
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Transfer an asset or record a license grant."""
    with open_registry(db) as registry, registry_errors():
        asset = registry.transfer_asset(asset_id, actor, to_id, transfer_type)
    render_asset(asset, title=f"{transfer_type.value} transfer recorded")


def update_metadata_cmd(
    asset_id: str = typer.Argument(..., help="Asset ID."),
    actor: str = typer.Option(..., "--actor", "-a", help=ACTOR_HELP),
    file_format: str = typer.Option(None, "--format"),
    file_size: int = typer.Option(None, "--size"),
    dimensions: str = typer.Option(None, "--dimensions"),
    duration: float = typer.Option(None, "--duration"),
    tags: list[str] = typer.Option(
        None, "--tag", help="Replace the tag list (repeatable)."
    ),
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Overwrite the given metadata fields; others are kept."""
    supplied = {
        "file_format": file_format,
        "file_size": file_size,
        "dimensions": dimensions,
        "duration": duration,
        "additional_tags": tags or None,
    }
    update = MetadataUpdate(**{k: v for k, v in supplied.items() if v is not None})
    if not update.model_fields_set:
        console.print("[yellow]Nothing to update.[/yellow]")
        raise typer.Exit(code=1)

    with open_registry(db) as registry, registry_errors():
        asset = registry.update_asset_metadata(asset_id, actor, update)
    render_asset(asset, title="Metadata updated")


def revoke_cmd(
    asset_id: str = typer.Argument(..., help="Asset ID."),
    actor: str = typer.Option(..., "--actor", "-a", help=ACTOR_HELP),
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Revoke an asset."""
    with open_registry(db) as registry, registry_errors():
        asset = registry.revoke_asset(asset_id, actor)
    render_asset(asset, title="Asset revoked")


def delete_cmd(
    asset_id: str = typer.Argument(..., help="Asset ID."),
    actor: str = typer.Option(..., "--actor", "-a", help=ACTOR_HELP),
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Soft-delete an asset. The record stays readable by ID."""
    with open_registry(db) as registry, registry_errors():
        result = registry.delete_asset(asset_id, actor)
    console.print(f"[bold green]{result.message}[/bold green] ({result.asset_id})")
