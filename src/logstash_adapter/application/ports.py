"""
Port interfaces for the application layer.

These are the interfaces that infrastructure adapters must implement.
They define the contract between the stream driver and the outside world.
"""

from typing import Iterator, Protocol, runtime_checkable

from logstash_adapter.core.models import LogRecord

__all__ = [
    "TransportConnection",
    "Transport",
    "RecordSourcePort",
]


@runtime_checkable
class TransportConnection(Protocol):
    """
    An already-dialed byte sink.

    The adapter only ever writes one serialized event per call. It does not
    close the connection; whoever dialed it owns its lifecycle.
    """

    def write(self, data: bytes) -> int:
        """Write one payload, returning the number of bytes sent."""
        ...

    def close(self) -> None:
        """Release the underlying resources."""
        ...


@runtime_checkable
class Transport(Protocol):
    """
    Port for transports resolved by name from the transport registry.
    """

    name: str

    def dial(self, address: str, options: dict[str, str]) -> TransportConnection:
        """Open a connection to the address."""
        ...


@runtime_checkable
class RecordSourcePort(Protocol):
    """
    Port for record sources.

    Implementations yield LogRecords until the stream closes:
    - Host channels
    - Docker json-file logs (file or stdin)
    """

    def read_records(self) -> Iterator[LogRecord]:
        """Read records from the source."""
        ...

    def metadata(self) -> dict[str, str]:
        """Get source metadata (path, type, counters, etc.)."""
        ...
