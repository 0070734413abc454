"""Asset registry CLI — Typer-based command-line interface.

Provides the ``assetregistry`` command with subcommands for registering,
inspecting, transferring, revoking and deleting assets, checking index
consistency, and serving the HTTP API.

All output uses Rich for formatted terminal display.
"""
