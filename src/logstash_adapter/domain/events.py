"""
Event construction.

Turns a flushed container buffer plus the record that triggered the flush
into an enriched Event.
"""

from logstash_adapter.core.models import BufferedLine, Event, LogRecord

__all__ = [
    "merge_messages",
    "get_tags",
    "normalize_container_name",
    "build_event",
]


def merge_messages(lines: list[BufferedLine]) -> str:
    """Join buffered line texts with a single newline, no trailing newline."""
    return "\n".join(line.text for line in lines)


def get_tags(lines: list[BufferedLine]) -> list[str]:
    """
    Decide the tags of a flushed buffer.

    A single-line buffer yields [""], not []. Downstream parsers read the
    empty element as "no tag".
    """
    if len(lines) > 1:
        return ["multiline"]
    return [""]


def normalize_container_name(name: str) -> str:
    """Strip every leading '/' from a container name."""
    return name.lstrip("/")


def build_event(lines: list[BufferedLine], record: LogRecord, host: str) -> Event:
    """
    Assemble an Event from a flushed buffer.

    Args:
        lines: Buffer contents at flush time
        record: The record that triggered the flush, supplies the metadata
        host: Host identity resolved at stream start

    Returns:
        Event ready for serialization
    """
    container = record.container
    return Event(
        message=merge_messages(lines),
        container_name=normalize_container_name(container.name),
        container_id=container.id,
        image_name=container.config.image,
        container_hostname=container.config.hostname,
        host=host,
        stream=record.source,
        tags=get_tags(lines),
    )
