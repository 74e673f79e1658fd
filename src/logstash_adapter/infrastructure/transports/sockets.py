"""
Built-in socket transports: udp, tcp and tls.
"""

import socket
import ssl

from logstash_adapter.infrastructure.transports.base import (
    BaseTransport,
    SocketConnection,
    parse_timeout,
    split_address,
)

__all__ = ["UDPTransport", "TCPTransport", "TLSTransport"]


class UDPTransport(BaseTransport):
    """
    Connected datagram socket. One event per datagram, fire-and-forget.

    Example:
        conn = UDPTransport().dial("logstash.local:5000", {})
        conn.write(b'{"message":"hi"}')
    """

    name = "udp"
    description = "UDP datagrams, one JSON object per datagram"

    def dial(self, address: str, options: dict[str, str]) -> SocketConnection:
        host, port = split_address(address)

        error: OSError | None = None
        for family, sock_type, proto, _, sockaddr in socket.getaddrinfo(
            host, port, type=socket.SOCK_DGRAM
        ):
            sock = socket.socket(family, sock_type, proto)
            try:
                sock.connect(sockaddr)
            except OSError as e:
                sock.close()
                error = e
                continue
            return SocketConnection(sock, stream=False)

        if error is not None:
            raise error
        raise OSError(f"getaddrinfo returned no addresses for {address}")


class TCPTransport(BaseTransport):
    """
    Stream socket. Events are written back to back with no delimiter.

    Options:
        timeout: Connect timeout in seconds
    """

    name = "tcp"
    description = "TCP stream, concatenated JSON objects (no framing)"

    def dial(self, address: str, options: dict[str, str]) -> SocketConnection:
        host, port = split_address(address)
        sock = socket.create_connection((host, port), timeout=parse_timeout(options))
        # Writes inherit the transport's blocking behavior
        sock.settimeout(None)
        return SocketConnection(sock, stream=True)


class TLSTransport(BaseTransport):
    """
    TCP wrapped in TLS.

    Options:
        timeout: Connect timeout in seconds
        tls.ca_file: CA bundle used to verify the server
        tls.insecure: "true" to skip certificate and hostname verification
    """

    name = "tls"
    description = "TLS over TCP, concatenated JSON objects (no framing)"

    def dial(self, address: str, options: dict[str, str]) -> SocketConnection:
        host, port = split_address(address)

        context = ssl.create_default_context(cafile=options.get("tls.ca_file") or None)
        if options.get("tls.insecure", "").lower() in ("1", "true", "yes"):
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        raw = socket.create_connection((host, port), timeout=parse_timeout(options))
        try:
            sock = context.wrap_socket(raw, server_hostname=host)
        except OSError:
            raw.close()
            raise
        sock.settimeout(None)
        return SocketConnection(sock, stream=True)
