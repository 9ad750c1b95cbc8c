"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from blocksync.cli_commands.blocks import blocks
    from blocksync.cli_commands.catalog import catalog
    from blocksync.cli_commands.sync import sync

    cli.add_command(sync)
    cli.add_command(catalog)
    cli.add_command(blocks)
