"""
Core data models, limits and exceptions for the Logstash adapter.
"""

from logstash_adapter.core.models import (
    ContainerConfig,
    ContainerInfo,
    LogRecord,
    BufferedLine,
    Event,
    EVENT_FIELDS,
    Route,
)
from logstash_adapter.core.exceptions import (
    AdapterError,
    AdapterNotFoundError,
    ConfigurationError,
    RecordDecodeError,
)
from logstash_adapter.core.limits import (
    BufferLimits,
    UNBOUNDED,
    validate_limits,
)

__all__ = [
    "ContainerConfig",
    "ContainerInfo",
    "LogRecord",
    "BufferedLine",
    "Event",
    "EVENT_FIELDS",
    "Route",
    "AdapterError",
    "AdapterNotFoundError",
    "ConfigurationError",
    "RecordDecodeError",
    # Limits
    "BufferLimits",
    "UNBOUNDED",
    "validate_limits",
]
