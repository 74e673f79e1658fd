"""
JSON serializer and emitter.

Each event becomes one compact UTF-8 JSON object written to the transport
in a single call. No framing, no retry.
"""

import json
import logging
from typing import TYPE_CHECKING

from logstash_adapter.core.models import Event

if TYPE_CHECKING:
    from logstash_adapter.application.ports import TransportConnection

__all__ = ["JSONEmitter", "encode_event"]

logger = logging.getLogger(__name__)


def encode_event(event: Event) -> bytes:
    """
    Serialize an event to compact UTF-8 JSON.

    Raises:
        TypeError: If a field holds a non-serializable value
        ValueError: If the text cannot be encoded (e.g. lone surrogates)
    """
    payload = json.dumps(event.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return payload.encode("utf-8")


class JSONEmitter:
    """
    Write events to an already-dialed connection.

    Serialization and write failures are logged with their own prefixes and
    reported through the return value; the caller moves on to the next record.

    Example:
        emitter = JSONEmitter(conn)
        if not emitter.emit(event):
            ...  # already logged, event dropped
    """

    def __init__(self, conn: "TransportConnection"):
        self.conn = conn
        self.sent = 0
        self.marshal_errors = 0
        self.write_errors = 0

    def encode(self, event: Event) -> bytes:
        return encode_event(event)

    def emit(self, event: Event) -> bool:
        """
        Serialize and write one event.

        Returns:
            True when the payload was handed to the transport
        """
        try:
            payload = self.encode(event)
        except (TypeError, ValueError) as e:
            self.marshal_errors += 1
            logger.error("logstash_marshal: %s", e)
            return False

        try:
            self.conn.write(payload)
        except OSError as e:
            self.write_errors += 1
            logger.error("logstash_write: %s", e)
            return False

        self.sent += 1
        return True
