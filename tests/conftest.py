"""
Pytest fixtures for logstash adapter tests.
"""

import json
import socket

import pytest

from logstash_adapter.core.models import ContainerConfig, ContainerInfo, LogRecord, Route


class FakeConnection:
    """In-memory transport connection recording every payload."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.payloads: list[bytes] = []
        self.closed = False

    def write(self, data: bytes) -> int:
        if self.fail:
            raise OSError("connection refused")
        self.payloads.append(data)
        return len(data)

    def close(self) -> None:
        self.closed = True

    @property
    def events(self) -> list[dict]:
        return [json.loads(payload.decode("utf-8")) for payload in self.payloads]


@pytest.fixture
def fake_conn() -> FakeConnection:
    """Connection that records writes."""
    return FakeConnection()


@pytest.fixture
def failing_conn() -> FakeConnection:
    """Connection whose writes always fail."""
    return FakeConnection(fail=True)


@pytest.fixture
def route() -> Route:
    """Default UDP route."""
    return Route(address="127.0.0.1:5000", adapter="logstash")


@pytest.fixture
def container() -> ContainerInfo:
    """Container "a" named /svc."""
    return ContainerInfo(
        id="a",
        name="/svc",
        config=ContainerConfig(image="img", hostname="h"),
    )


@pytest.fixture
def make_record(container):
    """Factory for LogRecords on container "a" (or another id)."""

    def _make(
        data: str,
        container_id: str | None = None,
        name: str | None = None,
        source: str = "stdout",
    ) -> LogRecord:
        info = container
        if container_id is not None or name is not None:
            info = ContainerInfo(
                id=container_id or container.id,
                name=container.name if name is None else name,
                config=container.config,
            )
        return LogRecord(data=data, source=source, container=info)

    return _make


@pytest.fixture
def sample_traceback() -> list[str]:
    """Python traceback preceded by its log line and followed by the error."""
    return [
        "ERROR: boom",
        "Traceback (most recent call last):",
        '  File "x.py", line 3, in f',
        "    raise",
        "RuntimeError: boom",
    ]


@pytest.fixture
def sample_docker_json_logs() -> list[str]:
    """json-file log lines for a container printing a traceback."""
    return [
        '{"log":"starting worker\\n","stream":"stdout","time":"2026-01-27T10:15:32.123456789Z"}',
        '{"log":"ERROR: job failed\\n","stream":"stderr","time":"2026-01-27T10:15:33.000000001Z"}',
        '{"log":"Traceback (most recent call last):\\n","stream":"stderr","time":"2026-01-27T10:15:33.000000002Z"}',
        '{"log":"  File \\"job.py\\", line 12, in run\\n","stream":"stderr","time":"2026-01-27T10:15:33.000000003Z"}',
        '{"log":"ValueError: bad input\\n","stream":"stderr","time":"2026-01-27T10:15:33.000000004Z"}',
        '{"log":"worker idle\\n","stream":"stdout","time":"2026-01-27T10:15:34Z"}',
    ]


@pytest.fixture
def docker_log_file(tmp_path, sample_docker_json_logs):
    """Temporary json-file log."""
    log_file = tmp_path / "abc-json.log"
    log_file.write_text("\n".join(sample_docker_json_logs) + "\n")
    return log_file


@pytest.fixture
def container_config_file(tmp_path):
    """Temporary Docker config.v2.json."""
    config_file = tmp_path / "config.v2.json"
    config_file.write_text(json.dumps({
        "ID": "abc123def456",
        "Name": "/worker",
        "Config": {"Image": "acme/worker:1.2", "Hostname": "abc123def456"},
    }))
    return config_file


@pytest.fixture
def udp_receiver():
    """Bound localhost UDP socket, yields (socket, port)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5.0)
    try:
        yield sock, sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def tcp_listener():
    """Listening localhost TCP socket, yields (socket, port)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    sock.settimeout(5.0)
    try:
        yield sock, sock.getsockname()[1]
    finally:
        sock.close()
