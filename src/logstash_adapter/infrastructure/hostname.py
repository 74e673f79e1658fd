"""
Host identity resolution.

Resolved once per stream: ``HOSTNAME`` from the environment when set,
otherwise the operating system's hostname.
"""

import logging
import os
import socket
from typing import Mapping

__all__ = ["resolve_hostname"]

logger = logging.getLogger(__name__)


def resolve_hostname(environ: Mapping[str, str] | None = None) -> str:
    """
    Resolve the host identity stamped on every event.

    Args:
        environ: Environment mapping, defaults to os.environ

    Returns:
        Host name, or "" when the OS lookup fails
    """
    env = os.environ if environ is None else environ

    hostname = env.get("HOSTNAME", "")
    if hostname:
        return hostname

    logger.info("logstash: Defaulting to container hostname.")
    try:
        return socket.gethostname()
    except OSError as e:
        logger.error("logstash_hostname: %s", e)
        return ""
