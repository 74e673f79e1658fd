"""
Logstash adapter - ship container logs to Logstash as coalesced JSON events.

Consumes a stream of per-container log records, joins multi-line records
(stack traces, indented continuations, SQL error context) into single
events, enriches them with container metadata and writes one JSON object
per event to a UDP (or TCP/TLS) transport.

Usage:
    from logstash_adapter import create_adapter, RecordChannel

    adapter = create_adapter("logstash+udp://logstash.local:5000")

    channel = RecordChannel()
    threading.Thread(target=adapter.stream, args=(channel,)).start()
    channel.put(record)
    channel.close()

    # Classify a single line
    from logstash_adapter import classify
    classify('  File "app.py", line 3, in main')  # True
"""

__version__ = "0.3.0"

from logstash_adapter.core.models import (
    ContainerConfig,
    ContainerInfo,
    LogRecord,
    BufferedLine,
    Event,
    Route,
)
from logstash_adapter.core.exceptions import (
    AdapterError,
    AdapterNotFoundError,
    ConfigurationError,
    RecordDecodeError,
)
from logstash_adapter.core.limits import BufferLimits, validate_limits
from logstash_adapter.domain import (
    MultilineClassifier,
    Coalescer,
    build_event,
    classify,
)
from logstash_adapter.application import LogstashAdapter, new_adapter
from logstash_adapter.infrastructure import (
    RecordChannel,
    DockerJSONFileSource,
    load_container_info,
    JSONEmitter,
    resolve_hostname,
    transports,
    adapter_factories,
)
from logstash_adapter.config import AdapterSettings, load_settings

__all__ = [
    # Version
    "__version__",
    # Core models
    "ContainerConfig",
    "ContainerInfo",
    "LogRecord",
    "BufferedLine",
    "Event",
    "Route",
    # Exceptions
    "AdapterError",
    "AdapterNotFoundError",
    "ConfigurationError",
    "RecordDecodeError",
    # Limits
    "BufferLimits",
    "validate_limits",
    # Domain
    "MultilineClassifier",
    "Coalescer",
    "build_event",
    "classify",
    # Adapter
    "LogstashAdapter",
    "new_adapter",
    # Infrastructure
    "RecordChannel",
    "DockerJSONFileSource",
    "load_container_info",
    "JSONEmitter",
    "resolve_hostname",
    "transports",
    "adapter_factories",
    # Settings
    "AdapterSettings",
    "load_settings",
    # Convenience functions
    "create_adapter",
    "adapter_from_settings",
]


def create_adapter(uri: str, **options) -> LogstashAdapter:
    """
    Create an adapter from a route URI through the adapter factory registry.

    Args:
        uri: Route URI such as "logstash+tcp://logstash.local:5000"
        **options: Keyword arguments passed to the factory (limits, classifier, ...)

    Returns:
        LogstashAdapter with a dialed connection

    Raises:
        AdapterNotFoundError: If the adapter or its transport is not registered
        ConfigurationError: If the URI is malformed
        OSError: If dialing fails
    """
    route = Route.from_uri(uri)
    factory = adapter_factories.lookup(route.adapter_name)
    if factory is None:
        raise AdapterNotFoundError(route.adapter)
    return factory(route, **options)


def adapter_from_settings(settings: AdapterSettings | None = None) -> LogstashAdapter:
    """
    Create an adapter from environment settings.

    Args:
        settings: Settings to use, defaults to load_settings()

    Returns:
        LogstashAdapter configured from LOGSTASH_* variables
    """
    if settings is None:
        settings = load_settings()

    return create_adapter(
        settings.route,
        classifier=MultilineClassifier(extra_patterns=list(settings.extra_patterns)),
        limits=settings.limits,
        flush_on_close=settings.flush_on_close,
    )
