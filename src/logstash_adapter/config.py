"""Settings loaded from LOGSTASH_* environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping

from logstash_adapter.core.exceptions import ConfigurationError
from logstash_adapter.core.limits import BufferLimits, validate_limits
from logstash_adapter.core.models import Route

__all__ = ["AdapterSettings", "load_settings", "DEFAULT_ROUTE"]


DEFAULT_ROUTE = "logstash+udp://127.0.0.1:5000"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class AdapterSettings:
    route: str = DEFAULT_ROUTE
    max_lines: int | None = None
    max_bytes: int | None = None
    flush_on_close: bool = False
    extra_patterns: tuple[str, ...] = ()
    log_level: str = "INFO"

    @property
    def limits(self) -> BufferLimits:
        return validate_limits(self.max_lines, self.max_bytes)

    def to_route(self) -> Route:
        return Route.from_uri(self.route)


def _int_or_none(env: Mapping[str, str], key: str) -> int | None:
    value = env.get(key, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}", config_key=key) from None


def _bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = env.get(key)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{key} must be a boolean, got {value!r}", config_key=key)


def load_settings(environ: Mapping[str, str] | None = None) -> AdapterSettings:
    """Build AdapterSettings from environment variables with sensible defaults."""
    env = os.environ if environ is None else environ
    patterns = tuple(
        p for p in env.get("LOGSTASH_EXTRA_PATTERNS", "").splitlines() if p.strip()
    )
    settings = AdapterSettings(
        route=env.get("LOGSTASH_ROUTE", AdapterSettings.route),
        max_lines=_int_or_none(env, "LOGSTASH_MAX_LINES"),
        max_bytes=_int_or_none(env, "LOGSTASH_MAX_BYTES"),
        flush_on_close=_bool(env, "LOGSTASH_FLUSH_ON_CLOSE", AdapterSettings.flush_on_close),
        extra_patterns=patterns,
        log_level=env.get("LOGSTASH_LOG_LEVEL", AdapterSettings.log_level).upper(),
    )
    # Fail early on bad caps
    validate_limits(settings.max_lines, settings.max_bytes)
    return settings
