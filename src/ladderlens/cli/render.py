# Copyright (c) Syntropy Systems
"""Rich rendering of a record view for the terminal."""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from ladderlens.models import LadderInfoView, RecordView

MAX_ITEMS_SHOWN = 12


def _items_summary(items: list[str]) -> str:
    if not items:
        return "-"
    shown = ", ".join(
        escape(item.replace("\n", " ")) for item in items[:MAX_ITEMS_SHOWN]
    )
    hidden = len(items) - MAX_ITEMS_SHOWN
    if hidden > 0:
        shown += f" [dim](+{hidden} more)[/dim]"
    return shown


def render_key_identifiers(console: Console, view: RecordView) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(style="cyan")
    for name, value in view.sections.key_identifiers.items():
        table.add_row(name, escape(value))
    console.print(Panel(table, title="Key Identifiers", expand=False))


def render_cards(console: Console, view: RecordView) -> None:
    table = Table(show_header=True, header_style="bold")
    for card in view.cards:
        table.add_column(card.title)
    table.add_row(*[escape(card.value) for card in view.cards])
    console.print(table)


def render_funnel(console: Console, view: RecordView) -> None:
    """Stage table followed by the retention summary."""
    table = Table(
        show_header=True,
        header_style="bold",
        title="Codec Ladder Filtering Pipeline",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Stage")
    table.add_column("Count", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Removed", style="red")
    table.add_column("Ladders")

    for index, stage in enumerate(view.stages, start=1):
        table.add_row(
            str(index),
            escape(stage.name),
            str(stage.count),
            f"{stage.percentage:.1f}%",
            _items_summary(stage.removed),
            _items_summary(stage.items),
        )
    console.print(table)

    metrics = view.metrics
    console.print(
        f"Initial: [bold]{metrics.total_initial}[/bold]  "
        f"Final: [bold]{metrics.total_final}[/bold]  "
        f"Retention: [bold]{metrics.retention_percent:.1f}%[/bold]  "
        f"Total removed: [bold]{metrics.total_removed}[/bold] ladders"
    )


def render_ladder_info(console: Console, info: LadderInfoView) -> None:
    groups = info.groups
    console.print(f"\n[bold]{escape(info.label)}[/bold]")
    if groups.total == 0:
        console.print("[dim]No ladder info available[/dim]")
        return

    console.print(
        f"[green]Selected: {len(groups.selected)}[/green]  "
        f"[red]Not Selected: {len(groups.rejected)}[/red]  "
        f"[dim]Total: {groups.total} gears[/dim]"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Status")
    table.add_column("Name")
    table.add_column("Bitrate", justify="right")
    table.add_column("VMAF", justify="right")
    table.add_column("Definition", justify="right")
    table.add_column("Reason")

    for candidate in groups.selected:
        table.add_row(
            "[green]selected[/green]",
            escape(candidate.name),
            escape(candidate.bitrate_label),
            escape(candidate.vmaf_label),
            escape(candidate.definition_label),
            "",
        )
    for candidate in groups.rejected:
        table.add_row(
            "[red]rejected[/red]",
            escape(candidate.name),
            escape(candidate.bitrate_label),
            escape(candidate.vmaf_label),
            escape(candidate.definition_label),
            escape(candidate.reason_label),
        )
    console.print(table)


def render_details(console: Console, view: RecordView) -> None:
    if not view.details:
        return
    table = Table(
        show_header=True,
        header_style="bold",
        title=f"Additional Information ({len(view.details)} fields)",
    )
    table.add_column("Field", style="dim")
    table.add_column("Value")
    for detail in view.details:
        if detail.is_boolean and detail.boolean_value is not None:
            style = "green" if detail.boolean_value else "red"
            table.add_row(escape(detail.label), f"[{style}]{escape(detail.text)}[/{style}]")
        else:
            table.add_row(escape(detail.label), escape(detail.text))
    console.print(table)


def render_settings(console: Console, view: RecordView) -> None:
    for block in view.settings:
        title = block.label
        if block.has_hidden_nulls:
            title += " (null fields hidden)"
        console.print(Panel(escape(block.text), title=escape(title), expand=False))


def render_record_view(console: Console, view: RecordView) -> None:
    """Print every section of a record view."""
    render_key_identifiers(console, view)
    render_cards(console, view)
    render_funnel(console, view)
    for info in view.ladder_info:
        render_ladder_info(console, info)
    render_details(console, view)
    render_settings(console, view)
