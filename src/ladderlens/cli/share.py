# Copyright (c) Syntropy Systems
"""Share command - print a share link for one record."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ladderlens.cli.show import load_record
from ladderlens.config import load_config
from ladderlens.share import build_share_url, encode_record

console = Console()


def share(
    path: Path = typer.Argument(..., help="Workbook (.xlsx) or JSON file"),
    index: int = typer.Option(1, "--index", "-i", help="Record number (1-based)"),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Dashboard URL the link points at (defaults to config)",
    ),
    token_only: bool = typer.Option(
        False,
        "--token",
        "-t",
        help="Print only the token",
    ),
) -> None:
    """Print a share link for one record.

    Configuration fields (``*_settings``) are left out of the link.

    Example:
        ladderlens share logs.xlsx --index 2

    """
    record, _ = load_record(path, index)

    if token_only:
        console.print(encode_record(record), soft_wrap=True, markup=False)
        return

    config = load_config()
    url = build_share_url(record, base_url or config.share_base_url, config.share_route)
    console.print(url, soft_wrap=True, markup=False, highlight=False)
