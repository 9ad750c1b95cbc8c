"""``blocksync catalog`` — show the models a sync run would consider."""

from __future__ import annotations

import click

from blocksync.cli_commands._common import config_option, load_settings, region_option
from blocksync.cli_commands._output import console, print_catalog, setup_logging


@click.command()
@config_option
@region_option
@click.option("--offline", is_flag=True, help="Show the hardcoded model list only.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def catalog(config_path: str | None, region: str | None, offline: bool, as_json: bool) -> None:
    """List the catalog candidates and where they came from."""
    from blocksync.catalog.source import CatalogSource

    setup_logging(stderr=as_json)

    settings = load_settings(config_path, region=region)
    result = CatalogSource(settings).fetch(offline=offline)

    if as_json:
        console.print_json(result.model_dump_json())
        return

    print_catalog(result)
