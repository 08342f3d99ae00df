# Copyright (c) Syntropy Systems
"""Show command - render one record in the terminal."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console

from ladderlens.cli.render import render_record_view
from ladderlens.errors import UnsupportedInputError
from ladderlens.ingest import load_records
from ladderlens.view import build_record_view

if TYPE_CHECKING:
    from ladderlens.models import Record

console = Console()


def load_record(path: Path, index: int) -> tuple[Record, int]:
    """Load the 1-based ``index``-th record from ``path``.

    Prints an error and exits when the file can't be read or the index is
    out of range. Returns the record and the total record count.
    """
    try:
        records = load_records(path)
    except UnsupportedInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if not records:
        console.print(f"[yellow]No records found in {path}[/yellow]")
        raise typer.Exit(1)

    if index < 1 or index > len(records):
        console.print(
            f"[red]Error:[/red] record {index} out of range (1-{len(records)})"
        )
        raise typer.Exit(1)

    return records[index - 1], len(records)


def show(
    path: Path = typer.Argument(..., help="Workbook (.xlsx) or JSON file"),
    index: int = typer.Option(1, "--index", "-i", help="Record number (1-based)"),
    settings: bool = typer.Option(
        False,
        "--settings/--no-settings",
        help="Include configuration fields",
    ),
    full_settings: bool = typer.Option(
        False,
        "--full-settings",
        help="Keep null entries in configuration fields",
    ),
) -> None:
    """Show the filtering pipeline and ladder info of one record.

    Example:
        ladderlens show logs.xlsx --index 3

    """
    record, total = load_record(path, index)
    view = build_record_view(record, shared=not settings, show_nulls=full_settings)

    console.print(f"\n[bold]Record {index} of {total}[/bold] [dim]({path.name})[/dim]\n")
    render_record_view(console, view)
