"""
missionctl CLI - Serve command.

Run the dashboard API with uvicorn.
"""

import logging

import typer
from rich.console import Console

from missionctl.core.config.loader import load_config

console = Console()
logger = logging.getLogger(__name__)


def serve(
    ctx: typer.Context,
    host: str | None = typer.Option(
        None,
        "--host",
        help="Interface to bind (default from config: 127.0.0.1)",
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to run the server on (default from config: 8899)",
    ),
) -> None:
    """
    Start the mission control API server.

    Examples:
        missionctl serve                 # 127.0.0.1:8899
        missionctl serve --port 9000     # Custom port
    """
    debug = ctx.obj.get("debug", False) if ctx.obj else False

    import uvicorn

    from missionctl.core.dashboard.api.app import create_app

    config = load_config()
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    if not config.tracker.api_key:
        console.print(
            "[yellow]Warning:[/yellow] NOTION_API_KEY not set; "
            "tracker stats will show baseline numbers."
        )

    fastapi_app = create_app(config)

    url = f"http://{bind_host}:{bind_port}"
    console.print("[bold cyan]Mission Control server[/bold cyan]")
    console.print(f"[dim]Status: {url}/mc/status[/dim]")
    console.print(f"[dim]Stats:  {url}/mc/dwe-stats[/dim]")
    console.print(f"[dim]Docs:   {url}/docs[/dim]")
    console.print("\n[dim]Press Ctrl+C to stop[/dim]\n")

    logger.debug("Starting uvicorn on %s:%d", bind_host, bind_port)
    uvicorn.run(
        fastapi_app,
        host=bind_host,
        port=bind_port,
        log_level="info" if debug else "warning",
    )
