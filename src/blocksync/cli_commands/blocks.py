"""``blocksync blocks`` — list the blocks already on disk."""

from __future__ import annotations

import json
import sys

import click

from blocksync.cli_commands._common import blocks_dir_option, config_option, load_settings
from blocksync.cli_commands._output import console, print_blocks_table, setup_logging


@click.command()
@config_option
@blocks_dir_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def blocks(config_path: str | None, blocks_dir: str | None, as_json: bool) -> None:
    """List existing blocks and whether they carry the capability marker."""
    from blocksync.blocks.store import BlockStore
    from blocksync.runtime.errors import BlockLoadError

    setup_logging(stderr=as_json)
    settings = load_settings(config_path, blocks_dir=blocks_dir)
    store = BlockStore(settings.blocks_dir)
    try:
        found = store.load()
    except BlockLoadError as exc:
        console.print(f"[red]Error loading blocks:[/red] {exc}")
        sys.exit(1)

    if as_json:
        data = [
            {
                "file": str(b.path),
                "name": b.document.name,
                "version": b.document.version,
                "models": b.provider_ids,
                "capability": not b.lacks(settings.capability),
            }
            for b in found
        ]
        console.print_json(json.dumps(data))
        return

    if not found:
        console.print(f"[yellow]No blocks found in {settings.blocks_dir}.[/yellow]")
        return

    print_blocks_table(found, settings.capability)
