"""
Domain service protocols for the Logstash adapter.

These define the contracts the stream driver depends on. The default
implementations live in the domain modules and in infrastructure.
"""

from typing import Protocol, runtime_checkable

from logstash_adapter.core.models import Event

__all__ = [
    "ContinuationClassifier",
    "EventEmitter",
]


@runtime_checkable
class ContinuationClassifier(Protocol):
    """
    Protocol for multi-line classifiers.

    Must be pure and total: never raise, never keep state.
    """

    def is_continuation(self, line: str) -> bool:
        """Check whether a line continues the prior logical event."""
        ...


@runtime_checkable
class EventEmitter(Protocol):
    """
    Protocol for event emitters.

    Implementations serialize and send one event, returning whether it was
    sent. Failures are reported through the return value, never raised.
    """

    def emit(self, event: Event) -> bool:
        """Serialize and send a single event."""
        ...
