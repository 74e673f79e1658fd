"""
Base transport class and socket connection wrapper.
"""

import socket
from abc import ABC, abstractmethod

from logstash_adapter.core.exceptions import ConfigurationError

__all__ = ["BaseTransport", "SocketConnection", "split_address", "parse_timeout"]


def split_address(address: str) -> tuple[str, int]:
    """
    Split a ``host:port`` address. IPv6 hosts must be bracketed.

    Args:
        address: Destination such as "logs.local:5000" or "[::1]:5000"

    Returns:
        Tuple of (host, port)

    Raises:
        ConfigurationError: If the address is malformed
    """
    host, sep, port = address.strip().rpartition(":")
    if not sep or not host:
        raise ConfigurationError(f"Address must be host:port, got {address!r}", config_key="address")

    if host.startswith("["):
        if not host.endswith("]"):
            raise ConfigurationError(f"Unterminated IPv6 address: {address!r}", config_key="address")
        host = host[1:-1]
    elif ":" in host:
        raise ConfigurationError(
            f"IPv6 addresses must be bracketed: {address!r}", config_key="address"
        )

    try:
        port_number = int(port)
    except ValueError:
        raise ConfigurationError(f"Invalid port in address {address!r}", config_key="address") from None
    if not 0 < port_number < 65536:
        raise ConfigurationError(f"Port out of range in address {address!r}", config_key="address")

    return host, port_number


def parse_timeout(options: dict[str, str]) -> float | None:
    """Read the optional ``timeout`` dial option, in seconds."""
    value = options.get("timeout")
    if value in (None, ""):
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid timeout option: {value!r}", config_key="timeout") from None
    if timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive: {value!r}", config_key="timeout")
    return timeout


class SocketConnection:
    """
    Connection over a connected socket.

    Datagram sockets send each payload as one datagram; stream sockets
    send the whole payload with sendall.
    """

    def __init__(self, sock: socket.socket, stream: bool = False):
        self.sock = sock
        self.stream = stream

    def write(self, data: bytes) -> int:
        if self.stream:
            self.sock.sendall(data)
            return len(data)
        return self.sock.send(data)

    def close(self) -> None:
        self.sock.close()

    def __enter__(self) -> "SocketConnection":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class BaseTransport(ABC):
    """
    Base class for all transports.

    Subclasses must implement:
        - dial(address, options) -> SocketConnection

    Attributes:
        name: Unique identifier used in route specs ("logstash+<name>")
        description: Short human-readable summary
    """

    name: str = "base"
    description: str = ""

    @abstractmethod
    def dial(self, address: str, options: dict[str, str]) -> SocketConnection:
        """
        Open a connection to the address.

        Socket errors are raised unchanged; they are the dial error the
        factory surfaces to the host.

        Args:
            address: Destination endpoint, host:port
            options: Route options

        Returns:
            Connected SocketConnection
        """
        pass
