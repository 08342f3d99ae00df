# Copyright (c) Syntropy Systems
"""Dashboard command - start the web UI."""

from typing import Optional

import typer
import uvicorn
from rich.console import Console

from ladderlens.config import load_config
from ladderlens.dashboard import create_app

console = Console()


def dashboard(
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Port to run the dashboard on"
    ),
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    share_base_url: Optional[str] = typer.Option(
        None,
        "--share-base-url",
        help="Public URL used in share links (defaults to config)",
    ),
) -> None:
    """Start the ladderlens dashboard web UI."""
    config = load_config()
    if host:
        config.host = host
    if port:
        config.port = port
    if share_base_url:
        config.share_base_url = share_base_url

    console.print("[bold]ladderlens dashboard[/bold]")
    console.print(f"  Dashboard: [cyan]http://{config.host}:{config.port}[/cyan]")
    console.print(f"  Share links: [cyan]{config.share_base_url}[/cyan]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
