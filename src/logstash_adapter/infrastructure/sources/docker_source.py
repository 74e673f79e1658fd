"""
Docker json-file source.

Reads logs written by Docker's json-file logging driver and turns each line
into a LogRecord for a known container.

Example log line:
    {"log":"Starting application...\\n","stream":"stdout","time":"2024-01-15T10:30:00.123456789Z"}
"""

import io
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterator

from dateutil import parser as dateutil_parser

from logstash_adapter.core.exceptions import ConfigurationError, RecordDecodeError
from logstash_adapter.core.models import ContainerConfig, ContainerInfo, LogRecord

__all__ = ["DockerJSONFileSource", "load_container_info", "parse_docker_time", "read_stdin_lines"]

logger = logging.getLogger(__name__)


def parse_docker_time(value: str | None) -> datetime | None:
    """
    Parse a json-file timestamp (RFC 3339 with nanoseconds).

    Args:
        value: Timestamp string

    Returns:
        datetime, truncated to microseconds, or None if unparseable
    """
    if not value:
        return None

    try:
        return dateutil_parser.isoparse(value)
    except ValueError:
        pass

    # Fall back to dateutil for fuzzy parsing
    try:
        return dateutil_parser.parse(value, fuzzy=True)
    except (ValueError, OverflowError):
        return None


def read_stdin_lines(encoding: str = "utf-8", errors: str = "replace") -> Iterator[str]:
    """
    Yield stdin lines without their line terminators.

    Reads the binary buffer so undecodable bytes follow ``errors`` like
    file input does.
    """
    stream = io.TextIOWrapper(sys.stdin.buffer, encoding=encoding, errors=errors)
    try:
        for line in stream:
            yield line.rstrip("\n\r")
    finally:
        # Keep sys.stdin open
        stream.detach()


def load_container_info(config_path: str | Path) -> ContainerInfo:
    """
    Build ContainerInfo from a Docker ``config.v2.json``.

    Args:
        config_path: Path to the container's config.v2.json

    Returns:
        ContainerInfo with id, name, image and hostname

    Raises:
        ConfigurationError: If the file is not a container config
    """
    path = Path(config_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid container config {path}: {e}", config_key="config") from e

    if not isinstance(data, dict) or not data.get("ID"):
        raise ConfigurationError(f"Container config {path} has no ID", config_key="config")

    config = data.get("Config") or {}
    return ContainerInfo(
        id=data["ID"],
        name=data.get("Name", ""),
        config=ContainerConfig(
            image=config.get("Image", ""),
            hostname=config.get("Hostname", ""),
        ),
    )


class DockerJSONFileSource:
    """
    Stream LogRecords from a json-file log, or from stdin with path "-".

    Example:
        container = load_container_info("/var/lib/docker/containers/abc/config.v2.json")
        source = DockerJSONFileSource("/var/lib/docker/containers/abc/abc-json.log", container)
        for record in source.read_records():
            print(record.data)
    """

    def __init__(
        self,
        path: str | Path,
        container: ContainerInfo,
        encoding: str = "utf-8",
        errors: str = "replace",
        skip_invalid: bool = False,
    ):
        """
        Initialize the source.

        Args:
            path: Path to the json-file log, or "-" for stdin
            container: Metadata attached to every record
            encoding: File encoding (default: utf-8)
            errors: How to handle encoding errors (default: replace)
            skip_invalid: Log and skip undecodable lines instead of raising
        """
        self.path = path
        self.container = container
        self.encoding = encoding
        self.errors = errors
        self.skip_invalid = skip_invalid
        self._line_count = 0
        self._skipped = 0

        if not self._is_stdin and not Path(path).exists():
            raise FileNotFoundError(f"File not found: {path}")

    @property
    def _is_stdin(self) -> bool:
        return str(self.path) == "-"

    def _read_lines(self) -> Iterator[str]:
        if self._is_stdin:
            yield from read_stdin_lines(self.encoding, self.errors)
            return

        with open(self.path, "r", encoding=self.encoding, errors=self.errors) as f:
            for line in f:
                yield line.rstrip("\n\r")

    def decode_line(self, line: str, line_number: int | None = None) -> LogRecord:
        """
        Decode one json-file line.

        Raises:
            RecordDecodeError: If the line is not a json-file entry
        """
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise RecordDecodeError(f"JSON decode error: {e}", line=line, line_number=line_number) from e

        if not isinstance(data, dict) or not isinstance(data.get("log"), str):
            raise RecordDecodeError("Not a Docker json-file entry", line=line, line_number=line_number)

        return LogRecord(
            data=data["log"].rstrip("\n"),
            source=data.get("stream") or "stdout",
            container=self.container,
            time=parse_docker_time(data.get("time")),
        )

    def read_records(self) -> Iterator[LogRecord]:
        """
        Read records, one per non-blank line.

        Yields:
            LogRecord for each json-file entry
        """
        for line in self._read_lines():
            self._line_count += 1
            if not line.strip():
                continue
            try:
                yield self.decode_line(line, self._line_count)
            except RecordDecodeError as e:
                if not self.skip_invalid:
                    raise
                self._skipped += 1
                logger.warning("logstash: skipping line %d: %s", self._line_count, e.message)

    def metadata(self) -> dict[str, str]:
        """Get source metadata."""
        return {
            "source_type": "stdin" if self._is_stdin else "docker_json_file",
            "path": "<stdin>" if self._is_stdin else str(Path(self.path).absolute()),
            "container_id": self.container.id,
            "lines_read": str(self._line_count),
            "lines_skipped": str(self._skipped),
        }
