"""
Transport registry and built-in transports.
"""

from typing import Type

from logstash_adapter.infrastructure.transports.base import (
    BaseTransport,
    SocketConnection,
    split_address,
)

__all__ = [
    "TransportRegistry",
    "transports",
    "BaseTransport",
    "SocketConnection",
    "split_address",
]


class TransportRegistry:
    """
    Central registry of transports, looked up by the name in a route spec.

    Usage:
        from logstash_adapter.infrastructure.transports import transports

        transport = transports.lookup("udp")
        conn = transport.dial("logstash.local:5000", {})
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._transports: dict[str, Type[BaseTransport]] = {}

    def register(self, transport_class: Type[BaseTransport]) -> None:
        """
        Register a transport class under its name.

        Args:
            transport_class: Transport class to register
        """
        self._transports[transport_class.name] = transport_class

    def lookup(self, name: str) -> BaseTransport | None:
        """
        Get a transport instance by name.

        Args:
            name: Transport name ("udp", "tcp", ...)

        Returns:
            Transport instance or None if not found
        """
        transport_class = self._transports.get(name)
        if transport_class is None:
            return None
        return transport_class()

    def list_transports(self) -> list[str]:
        """
        List all registered transport names.

        Returns:
            List of transport names
        """
        return list(self._transports.keys())


# Global registry instance
transports = TransportRegistry()


def _register_builtin_transports() -> None:
    """Register all built-in transports."""
    # Import here to avoid circular imports
    from logstash_adapter.infrastructure.transports.sockets import (
        UDPTransport,
        TCPTransport,
        TLSTransport,
    )

    transports.register(UDPTransport)
    transports.register(TCPTransport)
    transports.register(TLSTransport)


# Auto-register built-in transports
_register_builtin_transports()
