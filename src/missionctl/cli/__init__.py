"""
missionctl CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging

import typer
from rich.console import Console

from missionctl import __version__
from missionctl.cli import schedule, serve, status
from missionctl.core.config.env import describe_env_source, load_layered_env

PANEL_SERVER = "Run the Dashboard"
PANEL_STATUS = "Check Status from the Terminal"

app = typer.Typer(
    name="missionctl",
    help="Local mission control dashboard server",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()
logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"missionctl version {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    missionctl - Mission Control for the local machine.

    Serves a JSON API with service health, cron jobs, the agent roster and
    task-tracker statistics.

    Examples:
        missionctl serve                       # Start the dashboard API
        missionctl next-run "*/15 * * * *"     # Estimate a cron next run
        missionctl stats                       # Tracker stats once
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    # .env files first so NOTION_API_KEY is available to every command
    env_origins = load_layered_env()
    logger.debug("NOTION_API_KEY source: %s", describe_env_source("NOTION_API_KEY", env_origins))

    ctx.obj = {"debug": debug, "env_origins": env_origins}


app.command(name="serve", rich_help_panel=PANEL_SERVER)(serve.serve)
app.command(name="next-run", rich_help_panel=PANEL_STATUS)(schedule.next_run)
app.command(name="crons", rich_help_panel=PANEL_STATUS)(schedule.crons)
app.command(name="services", rich_help_panel=PANEL_STATUS)(status.services)
app.command(name="stats", rich_help_panel=PANEL_STATUS)(status.stats)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
