"""
Per-container multi-line coalescing state machine.

Each container id owns an ordered buffer of pending lines. Feeding a record
either grows that buffer or completes it into one Event.
"""

from typing import Callable

from logstash_adapter.core.limits import UNBOUNDED, BufferLimits
from logstash_adapter.core.models import BufferedLine, Event, LogRecord
from logstash_adapter.domain.classifier import default_classifier
from logstash_adapter.domain.events import build_event

__all__ = ["Coalescer"]


class Coalescer:
    """
    Coalesce per-container line streams into logical events.

    Transitions for a record on container ``c``:

    - continuation line: appended to ``c``'s buffer
    - head line, empty buffer: seeds the buffer
    - head line, one buffered line (head or continuation): that line is flushed alone and
      the new line seeds the next event
    - head line, several buffered lines: the new line is appended, the
      whole buffer is flushed and the buffer empties

    Buffers are never flushed on their own; only ``drain()`` empties them
    without a triggering record.

    Example:
        coalescer = Coalescer(host="node-1")
        for record in records:
            event = coalescer.feed(record)
            if event is not None:
                send(event)
    """

    def __init__(
        self,
        host: str = "",
        classifier: Callable[[str], bool] | None = None,
        limits: BufferLimits = UNBOUNDED,
    ):
        """
        Initialize the coalescer.

        Args:
            host: Host identity stamped on every event
            classifier: Continuation predicate, defaults to the built-in table
            limits: Optional per-buffer caps that force a flush
        """
        self.host = host
        self.classifier = classifier or default_classifier
        self.limits = limits
        self._buffers: dict[str, list[BufferedLine]] = {}
        self._last_records: dict[str, LogRecord] = {}

    def feed(self, record: LogRecord) -> Event | None:
        """
        Feed one record through the state machine.

        Args:
            record: Incoming record

        Returns:
            The completed Event when this record triggers a flush, else None
        """
        container_id = record.container.id
        buffer = self._buffers.setdefault(container_id, [])
        self._last_records[container_id] = record
        line = record.data

        if self.classifier(line):
            buffer.append(BufferedLine(line))
            if self.limits.bounded and self.limits.reached(buffer):
                self._buffers[container_id] = []
                return build_event(buffer, record, self.host)
            return None

        if not buffer:
            buffer.append(BufferedLine(line))
            return None

        if len(buffer) > 1:
            # The head line terminates an in-progress multi-line event
            buffer.append(BufferedLine(line))
            next_buffer = []
        else:
            next_buffer = [BufferedLine(line)]

        self._buffers[container_id] = next_buffer
        return build_event(buffer, record, self.host)

    def pending(self, container_id: str) -> list[BufferedLine]:
        """Get a copy of the lines buffered for a container."""
        return list(self._buffers.get(container_id, []))

    def container_ids(self) -> list[str]:
        """List every container id seen so far, in first-seen order."""
        return list(self._buffers.keys())

    def drain(self) -> list[Event]:
        """
        Flush every non-empty buffer.

        Each event takes its metadata from the last record seen for its
        container. Buffers are left empty.

        Returns:
            Events in first-seen container order
        """
        events = []
        for container_id, buffer in self._buffers.items():
            if not buffer:
                continue
            record = self._last_records[container_id]
            events.append(build_event(buffer, record, self.host))
            self._buffers[container_id] = []
        return events
