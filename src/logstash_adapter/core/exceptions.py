"""
Custom exceptions for the Logstash adapter.
"""

__all__ = [
    "AdapterError",
    "AdapterNotFoundError",
    "ConfigurationError",
    "RecordDecodeError",
]


class AdapterError(Exception):
    """Base exception for all adapter errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class AdapterNotFoundError(AdapterError):
    """Raised when a route names a transport that is not registered."""

    def __init__(self, name: str):
        super().__init__("unable to find adapter: " + name)
        self.name = name


class ConfigurationError(AdapterError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {}
        if config_key is not None:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key


class RecordDecodeError(AdapterError):
    """Raised when a raw log line cannot be turned into a LogRecord."""

    def __init__(
        self,
        message: str,
        line: str | None = None,
        line_number: int | None = None,
    ):
        details = {}
        if line is not None:
            details["line"] = line[:100] + "..." if len(line) > 100 else line
        if line_number is not None:
            details["line_number"] = line_number
        super().__init__(message, details)
        self.line = line
        self.line_number = line_number
