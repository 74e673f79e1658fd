"""
Record sources.

These implement the RecordSourcePort interface for host channels and
Docker json-file logs.
"""

from logstash_adapter.infrastructure.sources.channel import (
    RecordChannel,
    ChannelClosedError,
)
from logstash_adapter.infrastructure.sources.docker_source import (
    DockerJSONFileSource,
    load_container_info,
    parse_docker_time,
    read_stdin_lines,
)

__all__ = [
    "RecordChannel",
    "ChannelClosedError",
    "DockerJSONFileSource",
    "load_container_info",
    "parse_docker_time",
    "read_stdin_lines",
]
