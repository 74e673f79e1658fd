"""
Infrastructure layer for the Logstash adapter.

Contains adapters that implement the ports defined in the application layer.
These connect the domain to external systems (sockets, files, the host).
"""

from logstash_adapter.infrastructure.sources import (
    RecordChannel,
    ChannelClosedError,
    DockerJSONFileSource,
    load_container_info,
)
from logstash_adapter.infrastructure.transports import (
    TransportRegistry,
    transports,
    BaseTransport,
    SocketConnection,
)
from logstash_adapter.infrastructure.registry import (
    AdapterFactoryRegistry,
    adapter_factories,
)
from logstash_adapter.infrastructure.emitter import JSONEmitter, encode_event
from logstash_adapter.infrastructure.hostname import resolve_hostname

__all__ = [
    # Sources
    "RecordChannel",
    "ChannelClosedError",
    "DockerJSONFileSource",
    "load_container_info",
    # Transports
    "TransportRegistry",
    "transports",
    "BaseTransport",
    "SocketConnection",
    # Adapter factories
    "AdapterFactoryRegistry",
    "adapter_factories",
    # Emission
    "JSONEmitter",
    "encode_event",
    "resolve_hostname",
]
