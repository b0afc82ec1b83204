"""
missionctl CLI - Status commands.

Run the service checks or fetch tracker stats once, without the server.
"""

import asyncio
import json as json_module

import typer
from rich.console import Console
from rich.table import Table

from missionctl.core.config.loader import load_config
from missionctl.core.health.checks import check_services
from missionctl.core.health.models import ServiceState
from missionctl.core.tracker.aggregator import StatsAggregator
from missionctl.core.tracker.client import NotionTaskSource

console = Console()


def services(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """Check reachability of the configured services."""
    config = load_config()
    results = asyncio.run(check_services(config.services))

    if json_output:
        payload = [result.model_dump(mode="json", exclude_none=True) for result in results]
        console.print(json_module.dumps(payload, indent=2))
        return

    table = Table(title="Services")
    table.add_column("Service", style="bold")
    table.add_column("Status")
    table.add_column("Info", style="dim")
    for result in results:
        state = (
            "[green]online[/green]"
            if result.status == ServiceState.ONLINE
            else "[red]offline[/red]"
        )
        table.add_row(result.name, state, result.info)
    console.print(table)


def stats(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """
    Fetch task-tracker statistics once.

    Never fails: without a reachable tracker the baseline numbers are shown
    with the error.
    """
    config = load_config()
    aggregator = StatsAggregator.from_config(
        config.tracker, NotionTaskSource.from_config(config.tracker)
    )
    result = asyncio.run(aggregator.get_stats())

    if json_output:
        payload = result.model_dump(by_alias=True, exclude_none=True)
        console.print(json_module.dumps(payload, indent=2))
        return

    table = Table(title="Tracker Stats", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total (max id)", str(result.total))
    table.add_row("Completed", str(result.completed))
    table.add_row("In progress", str(result.in_progress))
    table.add_row("Remaining", str(result.remaining))
    if result.active_tasks is not None:
        table.add_row("Fetched records", str(result.active_tasks))
    table.add_row("Last updated", result.last_updated)
    console.print(table)

    if result.error:
        console.print(f"[yellow]Warning:[/yellow] {result.error}")
