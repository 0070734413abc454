"""Shared helpers for CLI commands: registry construction and rendering."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from assetregistry.config import RegistryConfig
from assetregistry.core.errors import RegistryError
from assetregistry.core.registry import AssetRegistry
from assetregistry.models.assets import AssetStatus, DigitalAsset

console = Console()

DB_OPTION_HELP = "Path to the registry SQLite database."

_STATUS_STYLE = {
    AssetStatus.ACTIVE: "green",
    AssetStatus.TRANSFERRED: "cyan",
    AssetStatus.REVOKED: "yellow",
    AssetStatus.DELETED: "red",
}


@contextmanager
def open_registry(db_path: Path | None) -> Iterator[AssetRegistry]:
    """Open a registry on ``db_path`` (or the configured default) and close it after."""
    cfg = RegistryConfig(db_path=db_path) if db_path else RegistryConfig()
    registry = AssetRegistry(config=cfg)
    try:
        yield registry
    finally:
        registry.close()


@contextmanager
def registry_errors() -> Iterator[None]:
    """Print registry errors in red and exit with code 1."""
    try:
        yield
    except RegistryError as exc:
        console.print(f"[bold red]Error ({exc.kind}):[/bold red] {exc.message}")
        raise typer.Exit(code=1) from exc


def status_markup(status: AssetStatus) -> str:
    style = _STATUS_STYLE.get(status, "white")
    return f"[{style}]{status.value}[/{style}]"


def render_asset(asset: DigitalAsset, title: str = "Asset") -> None:
    """Print one asset as a panel, followed by its transfer history."""
    meta = asset.metadata
    lines = [
        f"[bold]ID:[/bold]            {asset.id}",
        f"[bold]Title:[/bold]         {asset.title}",
        f"[bold]Type:[/bold]          {asset.asset_type.value}",
        f"[bold]Status:[/bold]        {status_markup(asset.status)}",
        f"[bold]Owner:[/bold]         {asset.creator_id}",
        f"[bold]Content Hash:[/bold]  {asset.content_hash}",
        f"[bold]Registered:[/bold]    {asset.registration_date.isoformat()}",
        f"[bold]Modified:[/bold]      {asset.last_modified.isoformat()}",
        f"[bold]Format:[/bold]        {meta.file_format} ({meta.file_size} bytes)",
    ]
    if meta.dimensions:
        lines.append(f"[bold]Dimensions:[/bold]    {meta.dimensions}")
    if meta.duration is not None:
        lines.append(f"[bold]Duration:[/bold]      {meta.duration}s")
    if meta.additional_tags:
        lines.append(f"[bold]Tags:[/bold]          {', '.join(meta.additional_tags)}")
    if asset.description:
        lines.extend(["", f"[dim]{asset.description}[/dim]"])

    console.print(Panel("\n".join(lines), title=f"[bold]{title}[/bold]", padding=(1, 2)))

    if asset.transfer_history:
        table = Table(title="Transfer History")
        table.add_column("#", justify="right")
        table.add_column("Type")
        table.add_column("From", style="cyan")
        table.add_column("To", style="cyan")
        table.add_column("Date")
        for i, t in enumerate(asset.transfer_history, start=1):
            table.add_row(
                str(i), t.transfer_type.value, t.from_id, t.to_id,
                t.transfer_date.isoformat(),
            )
        console.print(table)
