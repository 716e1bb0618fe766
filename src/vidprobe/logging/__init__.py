"""Structured logging for vidprobe.

Provides configurable logging with JSON format support and file rotation,
plus a probe context that tags every record with the probe being parsed.
"""

from vidprobe.logging.config import configure_logging
from vidprobe.logging.context import (
    ProbeContextFilter,
    clear_probe_context,
    get_probe_context,
    probe_context,
    set_probe_context,
)
from vidprobe.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "ProbeContextFilter",
    "clear_probe_context",
    "configure_logging",
    "get_probe_context",
    "probe_context",
    "set_probe_context",
]
