"""Shared CLI output formatters."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from blocksync.blocks.models import Block  # noqa: TC001
from blocksync.catalog.models import CatalogResult  # noqa: TC001
from blocksync.reconcile.models import ReconcileMode, ReconcilePlan, ReconcileReport

console = Console()
err_console = Console(stderr=True)


def setup_logging(*, verbose: bool = False, stderr: bool = False) -> None:
    """Route library logging through rich.

    With *stderr* the log goes to standard error so that machine-readable
    output on standard out stays clean.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(console=err_console if stderr else console, show_path=False, markup=False)
        ],
        force=True,
    )


def print_catalog(catalog: CatalogResult) -> None:
    """Pretty-print catalog candidates as a table."""
    title = f"Catalog ({catalog.origin.value})"
    table = Table(title=title)
    table.add_column("Short name", style="cyan")
    table.add_column("Model ID")
    table.add_column("Display name")
    table.add_column("Context")

    for d in catalog.descriptors:
        table.add_row(
            d.short_name,
            d.provider_model_id,
            d.display_name,
            str(d.context_length) if d.context_length else "-",
        )

    console.print(table)
    if catalog.degraded:
        console.print(f"[yellow]Using hardcoded model list:[/yellow] {catalog.reason}")


def print_blocks_table(blocks: list[Block], capability: str) -> None:
    """Pretty-print existing blocks as a table."""
    table = Table(title="Existing Blocks")
    table.add_column("File", style="cyan")
    table.add_column("Name")
    table.add_column("Version")
    table.add_column("Model ID")
    table.add_column(capability)

    for block in blocks:
        table.add_row(
            block.path.name,
            block.document.name,
            block.document.version,
            ", ".join(block.provider_ids),
            "no" if block.lacks(capability) else "yes",
        )

    console.print(table)


def print_plan(plan: ReconcilePlan) -> None:
    """Summarise what a run is going to do."""
    console.print(f"\n[bold]Mode:[/bold] {plan.mode.value}")
    console.print(f"[bold]New version:[/bold] {plan.version}")

    for skipped in plan.skipped:
        console.print(
            f"  [dim]skip[/dim] {skipped.descriptor.short_name} "
            f"({skipped.descriptor.provider_model_id} already present)"
        )

    verb = "create" if plan.mode == ReconcileMode.CREATE else "update"
    for item in plan.writes:
        console.print(f"  [green]{verb}[/green] {item.path}")

    for failure in plan.rejected:
        console.print(f"  [red]cannot update[/red] {failure.path}: {failure.error}")

    if plan.mode == ReconcileMode.NOOP:
        console.print("[green]Nothing to do: all blocks are present and have proper capabilities.[/green]")


def print_report(report: ReconcileReport) -> None:
    """Summarise the outcome of a run."""
    console.print(
        f"\n[bold]Done:[/bold] {len(report.written)} written, "
        f"{len(report.failed)} failed, {len(report.skipped)} skipped"
    )
    for failure in report.failed:
        console.print(f"  [red]failed[/red] {failure.path}: {failure.error}")
    if report.committed:
        console.print(f"[green]Committed {len(report.written)} file(s), version {report.version}[/green]")
    elif report.written:
        console.print("[yellow]Changes left uncommitted.[/yellow]")
