"""
Application layer for the Logstash adapter.

Contains the stream driver that orchestrates domain services and
infrastructure adapters.
"""

from logstash_adapter.application.stream_logs import (
    LogstashAdapter,
    new_adapter,
    DEFAULT_TRANSPORT,
)
from logstash_adapter.application.ports import (
    TransportConnection,
    Transport,
    RecordSourcePort,
)

__all__ = [
    "LogstashAdapter",
    "new_adapter",
    "DEFAULT_TRANSPORT",
    "TransportConnection",
    "Transport",
    "RecordSourcePort",
]
