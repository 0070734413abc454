"""``assetregistry verify | serve`` — consistency check and HTTP server."""

from __future__ import annotations

from pathlib import Path

import typer

from assetregistry.cli.commands._common import DB_OPTION_HELP, console, open_registry
from assetregistry.config import RegistryConfig


def verify_cmd(
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Check that the creator index agrees with the asset store."""
    with open_registry(db) as registry:
        problems = registry.verify_consistency()
        asset_count = registry.assets.count()

    if not problems:
        console.print(
            f"[bold green]Consistent:[/bold green] {asset_count} assets, "
            "every one listed under exactly its owner."
        )
        return

    console.print(f"[bold red]{len(problems)} problem(s) found:[/bold red]")
    for problem in problems:
        console.print(f"  [red]-[/red] {problem}")
    raise typer.Exit(code=1)


def serve_cmd(
    host: str = typer.Option(None, "--host", help="Bind address."),
    port: int = typer.Option(None, "--port", help="Bind port."),
    db: Path = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Serve the registry over HTTP."""
    import uvicorn

    from assetregistry.api.app import create_app

    cfg = RegistryConfig(db_path=db) if db else RegistryConfig()
    bind_host = host or cfg.host
    bind_port = port or cfg.port

    console.print(
        f"[bold cyan]Serving registry[/bold cyan] at http://{bind_host}:{bind_port} "
        f"[dim](db: {cfg.db_path})[/dim]"
    )
    uvicorn.run(
        create_app(config=cfg),
        host=bind_host,
        port=bind_port,
        log_level=cfg.log_level.lower(),
    )
