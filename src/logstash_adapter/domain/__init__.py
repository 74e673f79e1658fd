"""
Domain layer for the Logstash adapter.

Contains the multi-line classifier, the coalescing state machine and event
construction. This layer has no dependencies on sockets or the host.
"""

from logstash_adapter.domain.classifier import (
    DEFAULT_CONTINUATION_PATTERNS,
    MultilineClassifier,
    default_classifier,
    classify,
)
from logstash_adapter.domain.events import (
    merge_messages,
    get_tags,
    normalize_container_name,
    build_event,
)
from logstash_adapter.domain.coalescer import Coalescer
from logstash_adapter.domain.services import (
    ContinuationClassifier,
    EventEmitter,
)

__all__ = [
    # Classifier
    "DEFAULT_CONTINUATION_PATTERNS",
    "MultilineClassifier",
    "default_classifier",
    "classify",
    # Events
    "merge_messages",
    "get_tags",
    "normalize_container_name",
    "build_event",
    # State machine
    "Coalescer",
    # Service protocols
    "ContinuationClassifier",
    "EventEmitter",
]
