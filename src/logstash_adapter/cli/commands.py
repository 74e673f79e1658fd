"""
CLI commands using the application layer.

This module provides the CLI command implementations that wire up
the infrastructure adapters to the stream driver.
"""

import logging
from dataclasses import replace
from typing import Iterator

from rich.console import Console
from rich.logging import RichHandler

from logstash_adapter import create_adapter
from logstash_adapter.core.exceptions import AdapterError, RecordDecodeError
from logstash_adapter.core.limits import validate_limits
from logstash_adapter.core.models import ContainerConfig, ContainerInfo, Event
from logstash_adapter.domain.classifier import MultilineClassifier
from logstash_adapter.domain.coalescer import Coalescer
from logstash_adapter.infrastructure.hostname import resolve_hostname
from logstash_adapter.infrastructure.sources import (
    DockerJSONFileSource,
    load_container_info,
    read_stdin_lines,
)
from logstash_adapter.cli.output import render_events, render_classification

__all__ = [
    "configure_logging",
    "build_container",
    "ship_command",
    "preview_command",
    "classify_command",
]


def configure_logging(level: str, console: Console) -> None:
    """Route adapter diagnostics through a Rich handler on the given console."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def build_container(
    config_path: str | None,
    container_id: str | None,
    name: str | None,
    image: str | None,
    hostname: str | None,
) -> ContainerInfo:
    """
    Resolve container metadata from a config.v2.json and/or explicit options.

    Explicit options override values read from the config file.

    Raises:
        AdapterError: If neither a config file nor an id is given
    """
    if config_path:
        container = load_container_info(config_path)
    elif container_id:
        container = ContainerInfo(id=container_id)
    else:
        raise AdapterError("a container --id or --config is required")

    config = ContainerConfig(
        image=container.config.image if image is None else image,
        hostname=container.config.hostname if hostname is None else hostname,
    )
    return replace(
        container,
        id=container_id or container.id,
        name=container.name if name is None else name,
        config=config,
    )


def ship_command(
    file_path: str,
    route_uri: str,
    container: ContainerInfo,
    max_lines: int | None,
    max_bytes: int | None,
    flush_on_close: bool,
    patterns: tuple[str, ...],
    skip_invalid: bool,
    quiet: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the ship command.

    Streams a json-file log through the adapter to the route.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    try:
        source = DockerJSONFileSource(file_path, container, skip_invalid=skip_invalid)
        adapter = create_adapter(
            route_uri,
            classifier=MultilineClassifier(extra_patterns=list(patterns)),
            limits=validate_limits(max_lines, max_bytes),
            flush_on_close=flush_on_close,
        )
    except FileNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1
    except AdapterError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1
    except OSError as e:
        error_console.print(f"[red]Unable to connect to {route_uri}:[/red] {e}")
        return 1

    try:
        adapter.stream(source.read_records())
    except RecordDecodeError as e:
        error_console.print(f"[red]Decode error in {file_path}:[/red] {e}")
        return 1
    finally:
        adapter.conn.close()

    if not quiet:
        stats = adapter.stats()
        console.print(
            f"Shipped [cyan]{stats['events_emitted']}[/cyan] events "
            f"from {stats['records_read']} records to {adapter.route}"
            + (f" ([red]{stats['events_dropped']} dropped[/red])" if stats["events_dropped"] else "")
        )

    return 0


def preview_command(
    file_path: str,
    container: ContainerInfo,
    output_format: str,
    max_lines: int | None,
    max_bytes: int | None,
    flush_on_close: bool,
    patterns: tuple[str, ...],
    skip_invalid: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the preview command.

    Runs the coalescing pipeline without a transport and renders the events.

    Returns:
        Exit code
    """
    try:
        source = DockerJSONFileSource(file_path, container, skip_invalid=skip_invalid)
        coalescer = Coalescer(
            host=resolve_hostname(),
            classifier=MultilineClassifier(extra_patterns=list(patterns)),
            limits=validate_limits(max_lines, max_bytes),
        )
    except FileNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1
    except AdapterError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1

    events: list[Event] = []
    try:
        for record in source.read_records():
            event = coalescer.feed(record)
            if event is not None:
                events.append(event)
    except RecordDecodeError as e:
        error_console.print(f"[red]Decode error in {file_path}:[/red] {e}")
        return 1

    if flush_on_close:
        events.extend(coalescer.drain())

    if events:
        render_events(events, output_format, console)
    elif output_format != "json":
        console.print("[yellow]No complete events.[/yellow]")

    return 0


def _read_raw_lines(file_path: str) -> Iterator[str]:
    if file_path == "-":
        yield from read_stdin_lines()
        return

    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            yield line.rstrip("\n\r")


def classify_command(
    file_path: str,
    patterns: tuple[str, ...],
    as_json: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the classify command.

    Shows which raw lines the classifier treats as continuations.

    Returns:
        Exit code
    """
    try:
        classifier = MultilineClassifier(extra_patterns=list(patterns))
    except AdapterError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1

    rows = [
        (number, line, classifier.matching_pattern(line))
        for number, line in enumerate(_read_raw_lines(file_path), 1)
    ]
    render_classification(rows, console, as_json=as_json)
    return 0
