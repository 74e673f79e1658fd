"""
Adapter factory registry.

The host resolves the adapter part of a route ("logstash" in
"logstash+udp://...") through this registry.
"""

from typing import Any, Callable

from logstash_adapter.core.models import Route

__all__ = ["AdapterFactory", "AdapterFactoryRegistry", "adapter_factories"]


AdapterFactory = Callable[[Route], Any]


class AdapterFactoryRegistry:
    """
    Registry of adapter factories keyed by adapter name.

    Usage:
        from logstash_adapter.infrastructure.registry import adapter_factories

        factory = adapter_factories.lookup(route.adapter_name)
        adapter = factory(route)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._factories: dict[str, AdapterFactory] = {}

    def register(self, factory: AdapterFactory, name: str) -> None:
        """
        Register a factory under an adapter name.

        Args:
            factory: Callable building an adapter from a Route
            name: Adapter name used in route specs
        """
        if not callable(factory):
            raise TypeError(f"factory must be callable, got {type(factory).__name__}")
        self._factories[name] = factory

    def lookup(self, name: str) -> AdapterFactory | None:
        """Get the factory registered under the name, or None."""
        return self._factories.get(name)

    def list_adapters(self) -> list[str]:
        """List all registered adapter names."""
        return list(self._factories.keys())


# Global registry instance
adapter_factories = AdapterFactoryRegistry()
