"""Main Typer application — imports and registers all CLI commands.

Entry point: ``assetregistry`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from assetregistry.cli.commands.assets import list_cmd, register_cmd, show_cmd
from assetregistry.cli.commands.maintenance import serve_cmd, verify_cmd
from assetregistry.cli.commands.ownership import (
    delete_cmd,
    revoke_cmd,
    transfer_cmd,
    update_metadata_cmd,
)
from assetregistry.config import config

app = typer.Typer(
    name="assetregistry",
    help="Digital asset registry: ownership, transfers and metadata.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _setup(
    log_level: str = typer.Option(
        None, "--log-level", help="Override ASSETREGISTRY_LOG_LEVEL."
    ),
) -> None:
    """Digital asset registry: ownership, transfers and metadata."""
    logging.basicConfig(
        level=(log_level or config.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="register", help="Register a new asset.")(register_cmd)
app.command(name="show", help="Show an asset by ID.")(show_cmd)
app.command(name="list", help="List a creator's assets (paginated).")(list_cmd)
app.command(name="transfer", help="Transfer or license an asset.")(transfer_cmd)
app.command(name="update-metadata", help="Update asset metadata.")(update_metadata_cmd)
app.command(name="revoke", help="Revoke an asset.")(revoke_cmd)
app.command(name="delete", help="Soft-delete an asset.")(delete_cmd)
app.command(name="verify", help="Check creator index consistency.")(verify_cmd)
app.command(name="serve", help="Run the HTTP API.")(serve_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
