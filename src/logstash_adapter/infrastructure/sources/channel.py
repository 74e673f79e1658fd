"""
Host-style record channel.

The host router pushes records from its own thread; the adapter's stream
loop iterates the channel until it is closed.
"""

import queue
from typing import Iterator

from logstash_adapter.core.models import LogRecord

__all__ = ["RecordChannel", "ChannelClosedError"]


_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Raised when putting a record on a closed channel."""


class RecordChannel:
    """
    Queue-backed channel of LogRecords.

    Closing the channel ends iteration once the records already queued have
    been consumed.

    Example:
        channel = RecordChannel()
        worker = threading.Thread(target=adapter.stream, args=(channel,))
        worker.start()
        channel.put(record)
        channel.close()
        worker.join()
    """

    def __init__(self, maxsize: int = 0):
        """
        Initialize the channel.

        Args:
            maxsize: Queue capacity, 0 for unbounded
        """
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._closed = False
        self._put_count = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, record: LogRecord, timeout: float | None = None) -> None:
        """Queue a record, blocking while the channel is full."""
        if self._closed:
            raise ChannelClosedError("put on closed channel")
        self._queue.put(record, timeout=timeout)
        self._put_count += 1

    def close(self) -> None:
        """Close the channel. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._queue.put(_CLOSED)

    def read_records(self) -> Iterator[LogRecord]:
        """Yield queued records until the channel is closed."""
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item

    def __iter__(self) -> Iterator[LogRecord]:
        return self.read_records()

    def metadata(self) -> dict[str, str]:
        """Get channel metadata."""
        return {
            "source_type": "channel",
            "records_put": str(self._put_count),
            "closed": str(self._closed),
        }
