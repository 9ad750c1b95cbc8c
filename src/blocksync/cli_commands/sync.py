"""``blocksync sync`` — create missing blocks or backfill capabilities."""

from __future__ import annotations

import sys

import click

from blocksync.cli_commands._common import (
    blocks_dir_option,
    config_option,
    load_settings,
    region_option,
)
from blocksync.cli_commands._output import console, print_plan, print_report, setup_logging


@click.command()
@config_option
@blocks_dir_option
@region_option
@click.option("--offline", is_flag=True, help="Skip the live listing and use the hardcoded model list.")
@click.option("--set-version", "version", default=None, help="Version to stamp instead of bumping the patch level.")
@click.option("--dry-run", is_flag=True, help="Show the plan, do not write or commit.")
@click.option("--no-commit", is_flag=True, help="Write files but leave them uncommitted.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def sync(
    config_path: str | None,
    blocks_dir: str | None,
    region: str | None,
    offline: bool,
    version: str | None,
    dry_run: bool,
    no_commit: bool,
    verbose: bool,
    telemetry: bool,
) -> None:
    """Bring the block directory in line with the Bedrock catalog."""
    from blocksync.runner import SyncRunner
    from blocksync.runtime.errors import BlockLoadError, CommitError, ConfigError

    setup_logging(verbose=verbose)

    settings = load_settings(
        config_path,
        blocks_dir=blocks_dir,
        region=region,
        commit=False if no_commit else None,
    )

    if telemetry or (settings.telemetry and settings.telemetry.enabled):
        from blocksync.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(settings.telemetry)
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    runner = SyncRunner(settings)

    try:
        plan = runner.plan(offline=offline, version=version)
    except (BlockLoadError, ConfigError) as exc:
        console.print(f"[red]Setup error:[/red] {exc}")
        sys.exit(1)

    print_plan(plan)
    if dry_run:
        console.print("[yellow]Dry run: no files written.[/yellow]")
        return

    try:
        report = runner.apply(plan)
    except CommitError as exc:
        console.print(f"[red]Commit failed:[/red] {exc}")
        sys.exit(exc.returncode or 1)
    except ConfigError as exc:
        console.print(f"[red]Cannot record version:[/red] {exc}")
        sys.exit(1)

    print_report(report)
