"""
Buffer limits for the coalescing state machine.

Per-container buffers are unbounded by default. Setting either cap makes
the coalescer force-flush a buffer once a continuation line brings it to
the limit.
"""

from dataclasses import dataclass

from logstash_adapter.core.exceptions import ConfigurationError
from logstash_adapter.core.models import BufferedLine

__all__ = [
    "BufferLimits",
    "UNBOUNDED",
    "validate_limits",
]


@dataclass(frozen=True)
class BufferLimits:
    """
    Optional caps on a single container buffer.

    Attributes:
        max_lines: Maximum number of buffered lines, or None
        max_bytes: Maximum UTF-8 size of the buffered text, or None
    """
    max_lines: int | None = None
    max_bytes: int | None = None

    @property
    def bounded(self) -> bool:
        return self.max_lines is not None or self.max_bytes is not None

    def reached(self, lines: list[BufferedLine]) -> bool:
        """Check whether a buffer has hit one of the caps."""
        if self.max_lines is not None and len(lines) >= self.max_lines:
            return True
        if self.max_bytes is not None:
            size = sum(len(line.text.encode("utf-8", errors="replace")) for line in lines)
            # Joining newlines count toward the emitted message size
            size += max(len(lines) - 1, 0)
            if size >= self.max_bytes:
                return True
        return False


UNBOUNDED = BufferLimits()


def validate_limits(max_lines: int | None = None, max_bytes: int | None = None) -> BufferLimits:
    """
    Build BufferLimits, rejecting non-positive caps.

    Raises:
        ConfigurationError: If a cap is zero or negative
    """
    if max_lines is not None and max_lines < 1:
        raise ConfigurationError(
            f"max_lines must be positive, got {max_lines}", config_key="max_lines"
        )
    if max_bytes is not None and max_bytes < 1:
        raise ConfigurationError(
            f"max_bytes must be positive, got {max_bytes}", config_key="max_bytes"
        )
    return BufferLimits(max_lines=max_lines, max_bytes=max_bytes)
