"""Helpers shared by the subcommands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from blocksync.cli_commands._output import console
from blocksync.config import SettingsLoader, SyncSettings
from blocksync.runtime.errors import ConfigError

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings YAML file.",
)
blocks_dir_option = click.option(
    "--blocks-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the block YAML files.",
)
region_option = click.option("--region", default=None, help="AWS region for the catalog listing.")


def load_settings(config_path: str | None, **overrides: Any) -> SyncSettings:
    """Load settings or exit with status 1 on a configuration error."""
    loader = SettingsLoader(Path(config_path) if config_path else None)
    try:
        return loader.load(**overrides)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)
