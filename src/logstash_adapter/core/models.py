"""
Core data models for the Logstash adapter.

These dataclasses describe what the host delivers (records and their
container metadata), what the adapter buffers, and what it puts on the wire.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from urllib.parse import parse_qsl, urlsplit

from logstash_adapter.core.exceptions import ConfigurationError

__all__ = [
    "ContainerConfig",
    "ContainerInfo",
    "LogRecord",
    "BufferedLine",
    "Event",
    "EVENT_FIELDS",
    "Route",
]


# Wire keys, in emission order. Downstream consumers depend on these names.
EVENT_FIELDS = (
    "message",
    "container_name",
    "container_id",
    "image_name",
    "container_hostname",
    "host",
    "stream",
    "tags",
)


@dataclass(frozen=True)
class ContainerConfig:
    """The subset of a container's configuration the adapter reports."""
    image: str = ""
    hostname: str = ""


@dataclass(frozen=True)
class ContainerInfo:
    """Identity of the container a record came from."""
    id: str
    name: str = ""
    config: ContainerConfig = field(default_factory=ContainerConfig)


@dataclass(frozen=True)
class LogRecord:
    """
    One log line as delivered by the host router.

    Attributes:
        data: The line text, without trailing newline
        source: Originating stream, "stdout" or "stderr"
        container: Metadata of the emitting container
        time: Host timestamp of the line, when known
    """
    data: str
    source: str
    container: ContainerInfo
    time: datetime | None = None


@dataclass
class BufferedLine:
    """A pending line in a container buffer. Only the text is kept."""
    text: str


@dataclass
class Event:
    """
    The coalesced, enriched unit that is serialized and sent to Logstash.
    """
    message: str
    container_name: str
    container_id: str
    image_name: str
    container_hostname: str
    host: str
    stream: str
    tags: list[str] = field(default_factory=list)

    @property
    def is_multiline(self) -> bool:
        return self.tags == ["multiline"]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire dictionary (exactly the eight event keys)."""
        return {name: getattr(self, name) for name in EVENT_FIELDS}


@dataclass
class Route:
    """
    Route descriptor handed to the adapter factory.

    Mirrors a logspout-style route: ``adapter`` may carry a transport
    suffix (``"logstash+tcp"``), ``address`` is the destination endpoint and
    ``options`` is passed through to the transport dial.
    """
    address: str
    adapter: str = "logstash"
    options: dict[str, str] = field(default_factory=dict)
    id: str = ""

    def adapter_transport(self, default: str) -> str:
        """
        Get the transport name encoded in the adapter spec.

        Args:
            default: Transport to use when the adapter has no "+transport" part

        Returns:
            Transport name
        """
        _, sep, transport = self.adapter.partition("+")
        if not sep or not transport:
            return default
        return transport

    @property
    def adapter_name(self) -> str:
        """Adapter name without the transport suffix."""
        return self.adapter.partition("+")[0]

    @classmethod
    def from_uri(cls, uri: str, route_id: str = "") -> "Route":
        """
        Parse a route URI such as ``logstash+udp://logs.local:5000?timeout=2``.

        Raises:
            ConfigurationError: If the URI has no scheme or no address
        """
        parts = urlsplit(uri.strip())
        if not parts.scheme:
            raise ConfigurationError(f"Route URI has no adapter scheme: {uri!r}", config_key="route")
        if not parts.netloc:
            raise ConfigurationError(f"Route URI has no address: {uri!r}", config_key="route")

        return cls(
            address=parts.netloc,
            adapter=parts.scheme,
            options=dict(parse_qsl(parts.query)),
            id=route_id,
        )

    def __str__(self) -> str:
        return f"{self.adapter}://{self.address}"
