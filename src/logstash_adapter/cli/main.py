"""
Main CLI entry point for the Logstash adapter.

Uses the application layer stream driver and infrastructure adapters.
"""

import os

import click
from rich.console import Console

from logstash_adapter import __version__
from logstash_adapter.config import load_settings
from logstash_adapter.core.exceptions import AdapterError

console = Console()
error_console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setting_default(name: str):
    """Option default taken from the LOGSTASH_* settings loaded by the group."""

    def default():
        return getattr(click.get_current_context().obj["settings"], name)

    return default


def container_options(func):
    """Attach the container metadata options shared by ship and preview."""
    options = [
        click.option(
            "--config", "config_path",
            type=click.Path(exists=True, dir_okay=False),
            help="Docker config.v2.json to read container metadata from"
        ),
        click.option("--id", "container_id", help="Container id (overrides --config)"),
        click.option("--name", help="Container name, leading '/' is stripped on output"),
        click.option("--image", help="Image name"),
        click.option("--hostname", "container_hostname", help="Container's configured hostname"),
        click.option(
            "--max-lines", type=click.IntRange(min=1), default=setting_default("max_lines"),
            help="Force-flush a container buffer at this many lines"
        ),
        click.option(
            "--max-bytes", type=click.IntRange(min=1), default=setting_default("max_bytes"),
            help="Force-flush a container buffer at this many bytes"
        ),
        click.option(
            "--pattern", "-p", "patterns", multiple=True,
            help="Extra continuation regex, added to $LOGSTASH_EXTRA_PATTERNS (repeatable)"
        ),
        click.option(
            "--skip-invalid", is_flag=True,
            help="Skip lines that are not json-file entries instead of failing"
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_container(ctx: click.Context, **kwargs):
    from logstash_adapter.cli.commands import build_container

    try:
        return build_container(**kwargs)
    except AdapterError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        ctx.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="logstash-adapter")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Diagnostic log level (default: $LOGSTASH_LOG_LEVEL or INFO)"
)
@click.pass_context
def cli(ctx: click.Context, quiet: bool, log_level: str | None) -> None:
    """
    Logstash adapter - ship container logs to Logstash.

    Coalesces multi-line records (stack traces, indented continuations,
    SQL error context) into single JSON events enriched with container
    metadata, and sends one event per datagram.

    Examples:

    \b
        logstash-adapter ship --config config.v2.json abc-json.log
        logstash-adapter ship -r logstash+tcp://logs:5000 --id abc --name /web app.log
        logstash-adapter preview --id abc --output json abc-json.log
        logstash-adapter classify traceback.txt
        logstash-adapter transports
    """
    from logstash_adapter.cli.commands import configure_logging

    try:
        settings = load_settings()
    except AdapterError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        ctx.exit(1)

    level = (log_level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        level = "INFO"
    configure_logging(level, error_console)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = console
    ctx.obj["error_console"] = error_console


@cli.command()
@click.argument("file", default="-", type=click.Path(allow_dash=True))
@click.option(
    "--route", "-r", "route_uri",
    default=setting_default("route"),
    help="Route URI, adapter[+transport]://host:port[?options] (default: $LOGSTASH_ROUTE)"
)
@container_options
@click.option(
    "--flush-on-close/--no-flush-on-close", default=setting_default("flush_on_close"),
    help="Send pending buffers when input ends (default: $LOGSTASH_FLUSH_ON_CLOSE or drop them)"
)
@click.pass_context
def ship(
    ctx: click.Context,
    file: str,
    route_uri: str,
    config_path: str | None,
    container_id: str | None,
    name: str | None,
    image: str | None,
    container_hostname: str | None,
    max_lines: int | None,
    max_bytes: int | None,
    patterns: tuple[str, ...],
    skip_invalid: bool,
    flush_on_close: bool,
) -> None:
    """
    Ship a Docker json-file log (or stdin) to Logstash.

    Examples:

    \b
        logstash-adapter ship --config /var/lib/docker/containers/abc/config.v2.json \\
            /var/lib/docker/containers/abc/abc-json.log
        cat abc-json.log | logstash-adapter ship -r logstash+tcp://logs:5000 --id abc -
    """
    from logstash_adapter.cli.commands import ship_command

    container = _resolve_container(
        ctx,
        config_path=config_path,
        container_id=container_id,
        name=name,
        image=image,
        hostname=container_hostname,
    )
    exit_code = ship_command(
        file_path=file,
        route_uri=route_uri,
        container=container,
        max_lines=max_lines,
        max_bytes=max_bytes,
        flush_on_close=flush_on_close,
        patterns=ctx.obj["settings"].extra_patterns + patterns,
        skip_invalid=skip_invalid,
        quiet=ctx.obj.get("quiet", False),
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command()
@click.argument("file", default="-", type=click.Path(allow_dash=True))
@container_options
@click.option(
    "--output", "-o", "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)"
)
@click.option(
    "--flush-on-close/--no-flush-on-close", default=True,
    help="Show pending buffers when input ends (default: on)"
)
@click.pass_context
def preview(
    ctx: click.Context,
    file: str,
    config_path: str | None,
    container_id: str | None,
    name: str | None,
    image: str | None,
    container_hostname: str | None,
    max_lines: int | None,
    max_bytes: int | None,
    patterns: tuple[str, ...],
    skip_invalid: bool,
    output_format: str,
    flush_on_close: bool,
) -> None:
    """
    Show the events a json-file log would produce, without sending them.

    Examples:

    \b
        logstash-adapter preview --id abc abc-json.log
        logstash-adapter preview --id abc --output json --no-flush-on-close abc-json.log
    """
    from logstash_adapter.cli.commands import preview_command

    container = _resolve_container(
        ctx,
        config_path=config_path,
        container_id=container_id,
        name=name,
        image=image,
        hostname=container_hostname,
    )
    exit_code = preview_command(
        file_path=file,
        container=container,
        output_format=output_format,
        max_lines=max_lines,
        max_bytes=max_bytes,
        flush_on_close=flush_on_close,
        patterns=ctx.obj["settings"].extra_patterns + patterns,
        skip_invalid=skip_invalid,
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command()
@click.argument("file", default="-", type=click.Path(allow_dash=True, exists=False))
@click.option(
    "--pattern", "-p", "patterns", multiple=True,
    help="Extra continuation regex, added to $LOGSTASH_EXTRA_PATTERNS (repeatable)"
)
@click.option("--json", "as_json", is_flag=True, help="Emit JSON lines instead of a table")
@click.pass_context
def classify(
    ctx: click.Context,
    file: str,
    patterns: tuple[str, ...],
    as_json: bool,
) -> None:
    """
    Show which plain-text lines are continuations.

    Examples:

    \b
        logstash-adapter classify traceback.txt
        kubectl logs web | logstash-adapter classify --json -
    """
    from logstash_adapter.cli.commands import classify_command

    if file != "-" and not os.path.isfile(file):
        error_console.print(f"[red]Error:[/red] File not found: {file}")
        ctx.exit(1)

    exit_code = classify_command(
        file_path=file,
        patterns=ctx.obj["settings"].extra_patterns + patterns,
        as_json=as_json,
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command()
@click.pass_context
def transports(ctx: click.Context) -> None:
    """
    List registered transports and adapters.

    Route URIs combine both: adapter+transport://host:port
    """
    from rich.table import Table
    from logstash_adapter import adapter_factories
    from logstash_adapter import transports as transport_registry

    table = Table(title="Transports")
    table.add_column("Transport", style="cyan")
    table.add_column("Description", style="green")

    for name in sorted(transport_registry.list_transports()):
        transport = transport_registry.lookup(name)
        if transport:
            table.add_row(name, transport.description)

    console.print(table)
    console.print(f"Adapters: [cyan]{', '.join(sorted(adapter_factories.list_adapters()))}[/cyan]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
