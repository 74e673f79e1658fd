"""
Stream logs use case.

The Logstash adapter: consumes the host's record stream, coalesces
multi-line records per container and sends each event as one JSON object.
"""

import logging
from typing import Iterable, Mapping

from logstash_adapter.application.ports import TransportConnection
from logstash_adapter.core.exceptions import AdapterNotFoundError
from logstash_adapter.core.limits import UNBOUNDED, BufferLimits
from logstash_adapter.core.models import Event, LogRecord, Route
from logstash_adapter.domain.coalescer import Coalescer
from logstash_adapter.domain.services import ContinuationClassifier, EventEmitter
from logstash_adapter.infrastructure.emitter import JSONEmitter
from logstash_adapter.infrastructure.hostname import resolve_hostname
from logstash_adapter.infrastructure.registry import adapter_factories
from logstash_adapter.infrastructure.transports import TransportRegistry

__all__ = ["LogstashAdapter", "new_adapter", "DEFAULT_TRANSPORT"]

logger = logging.getLogger(__name__)

DEFAULT_TRANSPORT = "udp"


class LogstashAdapter:
    """
    Use case: stream host records to Logstash.

    Orchestrates: record -> classify -> buffer or flush -> build -> encode -> write

    The loop is single-threaded and owns all per-container state. It ends
    when the record iterable is exhausted; pending buffers are dropped
    unless ``flush_on_close`` is set. The connection is left open.

    Example:
        adapter = new_adapter(Route.from_uri("logstash+udp://logstash:5000"))
        adapter.stream(channel)
    """

    def __init__(
        self,
        route: Route,
        conn: TransportConnection,
        classifier: ContinuationClassifier | None = None,
        limits: BufferLimits = UNBOUNDED,
        flush_on_close: bool = False,
        emitter: EventEmitter | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            route: Route this adapter serves
            conn: Already-dialed transport connection
            classifier: Continuation classifier, defaults to the built-in table
            limits: Optional per-container buffer caps
            flush_on_close: Emit pending buffers when the stream ends
            emitter: Event emitter, defaults to JSON over ``conn``
            environ: Environment used for host resolution, defaults to os.environ
        """
        self.route = route
        self.conn = conn
        self.classifier = classifier
        self.limits = limits
        self.flush_on_close = flush_on_close
        self.emitter = emitter or JSONEmitter(conn)
        self.environ = environ
        self.coalescer: Coalescer | None = None
        self.records_read = 0
        self.events_emitted = 0
        self.events_dropped = 0

    def stream(self, records: Iterable[LogRecord]) -> None:
        """
        Consume records until the stream closes.

        Args:
            records: Host channel or any iterable of LogRecords
        """
        host = resolve_hostname(self.environ)
        classify = self.classifier.is_continuation if self.classifier else None
        self.coalescer = Coalescer(host=host, classifier=classify, limits=self.limits)
        logger.debug("logstash: streaming to %s as host %r", self.route, host)

        for record in records:
            self.records_read += 1
            event = self.coalescer.feed(record)
            if event is not None:
                self.emit(event)

        if self.flush_on_close:
            for event in self.coalescer.drain():
                self.emit(event)

    def emit(self, event: Event) -> bool:
        """Send one event; failures are logged by the emitter and counted."""
        if self.emitter.emit(event):
            self.events_emitted += 1
            return True
        self.events_dropped += 1
        return False

    def stats(self) -> dict[str, int]:
        """Get stream counters."""
        return {
            "records_read": self.records_read,
            "events_emitted": self.events_emitted,
            "events_dropped": self.events_dropped,
        }


def new_adapter(
    route: Route,
    transports: TransportRegistry | None = None,
    classifier: ContinuationClassifier | None = None,
    limits: BufferLimits = UNBOUNDED,
    flush_on_close: bool = False,
) -> LogstashAdapter:
    """
    Create a LogstashAdapter with UDP as the default transport.

    Args:
        route: Route descriptor (address, adapter spec, dial options)
        transports: Transport registry, defaults to the global one
        classifier: Continuation classifier
        limits: Optional per-container buffer caps
        flush_on_close: Emit pending buffers when the stream ends

    Returns:
        Adapter with a dialed connection

    Raises:
        AdapterNotFoundError: If the route's transport is not registered
        OSError: If dialing fails (raised unchanged)
    """
    if transports is None:
        from logstash_adapter.infrastructure.transports import transports as global_transports
        transports = global_transports

    transport = transports.lookup(route.adapter_transport(DEFAULT_TRANSPORT))
    if transport is None:
        raise AdapterNotFoundError(route.adapter)

    conn = transport.dial(route.address, route.options)

    return LogstashAdapter(
        route,
        conn,
        classifier=classifier,
        limits=limits,
        flush_on_close=flush_on_close,
    )


adapter_factories.register(new_adapter, "logstash")
