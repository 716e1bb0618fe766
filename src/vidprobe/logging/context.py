"""Probe context for structured logging.

Each probe gets its own parser; when several probes are parsed side by side
their log lines interleave. The probe context (held in contextvars) lets
every record carry the probe id and source it belongs to.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_probe_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "probe_id", default=None
)
_probe_source: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "probe_source", default=None
)


def set_probe_context(probe_id: str, source: Path | str | None = None) -> None:
    """Set the current probe context.

    Args:
        probe_id: Probe identifier (e.g., "01").
        source: Name or path of the probed input, or None.
    """
    _probe_id.set(probe_id)
    _probe_source.set(str(source) if source is not None else None)


def clear_probe_context() -> None:
    """Clear the current probe context."""
    _probe_id.set(None)
    _probe_source.set(None)


@contextmanager
def probe_context(
    probe_id: str,
    source: Path | str | None = None,
) -> Generator[None, None, None]:
    """Context manager that sets the probe context and restores it on exit.

    Args:
        probe_id: Probe identifier (e.g., "01").
        source: Name or path of the probed input.

    Example:
        with probe_context("01", "movie.log"):
            logger.info("Parsing banner")  # Tagged with [P01]
    """
    old_probe_id = _probe_id.get()
    old_source = _probe_source.get()
    try:
        set_probe_context(probe_id, source)
        yield
    finally:
        _probe_id.set(old_probe_id)
        _probe_source.set(old_source)


def get_probe_context() -> tuple[str | None, str | None]:
    """Get the current probe context.

    Returns:
        Tuple of (probe_id, source), either may be None.
    """
    return _probe_id.get(), _probe_source.get()


class ProbeContextFilter(logging.Filter):
    """Logging filter that injects the probe context into log records.

    Adds probe_id and probe_source attributes for JSON output and a compact
    probe_tag ("[P01] " or empty) for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject probe context into the record. Never drops records."""
        probe_id, source = get_probe_context()

        record.probe_id = probe_id
        record.probe_source = source
        record.probe_tag = f"[P{probe_id}] " if probe_id else ""

        return True
