"""
Output formatters for CLI.
"""

import json

from rich.console import Console
from rich.table import Table
from rich.text import Text

from logstash_adapter.core.models import Event
from logstash_adapter.infrastructure.emitter import encode_event

__all__ = ["render_events", "render_table", "render_json", "render_classification"]


STREAM_STYLES = {
    "stdout": "green",
    "stderr": "red",
}


def render_events(events: list[Event], output_format: str, console: Console) -> None:
    """
    Render events in the specified format.

    Args:
        events: Events to render
        output_format: One of "table", "json"
        console: Rich Console for output
    """
    match output_format:
        case "json":
            render_json(events, console)
        case _:
            render_table(events, console)


def render_table(events: list[Event], console: Console) -> None:
    """Render events as a Rich table."""
    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    table.add_column("Container", style="cyan", width=20)
    table.add_column("Stream", width=8)
    table.add_column("Tags", width=10)
    table.add_column("Message", overflow="fold")

    for event in events:
        stream_style = STREAM_STYLES.get(event.stream, "white")
        tags = ", ".join(tag for tag in event.tags if tag) or "-"
        table.add_row(
            Text(event.container_name or event.container_id[:12]),
            Text(event.stream, style=stream_style),
            tags,
            Text(event.message),
        )

    console.print(table)


def render_json(events: list[Event], console: Console) -> None:
    """Render events as JSON lines, exactly as they go on the wire."""
    for event in events:
        console.print(
            encode_event(event).decode("utf-8"),
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )


def render_classification(
    rows: list[tuple[int, str, str | None]],
    console: Console,
    as_json: bool = False,
) -> None:
    """
    Render per-line classification results.

    Args:
        rows: (line_number, line, matching pattern or None)
        console: Rich Console for output
        as_json: Emit JSON lines instead of a table
    """
    if as_json:
        for number, line, pattern in rows:
            console.print(
                json.dumps({
                    "line_number": number,
                    "continuation": pattern is not None,
                    "pattern": pattern,
                    "line": line,
                }),
                markup=False,
                emoji=False,
                highlight=False,
                soft_wrap=True,
            )
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=6, justify="right")
    table.add_column("Cont.", width=5)
    table.add_column("Pattern", style="cyan", width=18)
    table.add_column("Line", overflow="fold")

    for number, line, pattern in rows:
        marker = "[yellow]yes[/yellow]" if pattern else "[dim]no[/dim]"
        table.add_row(str(number), marker, pattern or "", Text(line))

    console.print(table)
