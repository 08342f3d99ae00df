# Copyright (c) Syntropy Systems
"""Decode command - turn a share link back into a record."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ladderlens.cli.render import render_record_view
from ladderlens.errors import ShareDecodeError
from ladderlens.share import decode_token, extract_token
from ladderlens.view import build_record_view

console = Console()


def decode(
    link: str = typer.Argument(..., help="Share URL or bare token"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the record as JSON to this file",
    ),
    view: bool = typer.Option(
        False,
        "--view",
        help="Render the record instead of printing JSON",
    ),
) -> None:
    """Decode a share link.

    Examples:
        ladderlens decode 'http://localhost:8265/shared?data=eJyr...'
        ladderlens decode eJyr... --output record.json

    """
    try:
        record = decode_token(extract_token(link))
    except ShareDecodeError as e:
        console.print(f"[red]Error:[/red] {e.reason.message}")
        if e.detail:
            console.print(f"[dim]{escape(e.detail)}[/dim]")
        raise typer.Exit(1) from e

    text = json.dumps(record, indent=2, ensure_ascii=False)

    if output is not None:
        _ = output.write_text(text + "\n", encoding="utf-8")
        console.print(f"[green]Wrote record to {output}[/green]")
        return

    if view:
        render_record_view(console, build_record_view(record, shared=True))
        return

    console.print_json(text)
