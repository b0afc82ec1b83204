"""
missionctl CLI - Schedule commands.

Estimate cron next runs and list the current crontab.
"""

import json as json_module

import typer
from rich.console import Console
from rich.table import Table

from missionctl.core.config.loader import load_config
from missionctl.core.schedule.crontab import list_cron_jobs
from missionctl.core.schedule.nextrun import UNKNOWN, estimate_next_run

console = Console()


def next_run(
    schedule: str = typer.Argument(
        ...,
        help='Five-field cron schedule, e.g. "*/15 * * * *"',
    ),
) -> None:
    """
    Print the estimated next run of a cron schedule.

    Exits with status 1 when the schedule cannot be estimated.
    """
    label = estimate_next_run(schedule)
    console.print(label)
    if label == UNKNOWN:
        raise typer.Exit(1)


def crons(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """List the current user's cron jobs with next-run estimates."""
    config = load_config()
    jobs = list_cron_jobs(max_entries=config.crons.max_entries)

    if json_output:
        payload = [job.model_dump(by_alias=True) for job in jobs]
        console.print(json_module.dumps(payload, indent=2))
        return

    if not jobs:
        console.print("[dim]No cron jobs found.[/dim]")
        return

    table = Table(title="Cron Jobs")
    table.add_column("ID", style="cyan")
    table.add_column("Schedule")
    table.add_column("Command", style="bold")
    table.add_column("Next Run", style="green")
    for job in jobs:
        table.add_row(job.id, job.schedule, job.command, job.next_run)
    console.print(table)
