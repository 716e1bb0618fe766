"""Merge CLI logging flags into the loaded LoggingConfig."""

from __future__ import annotations

import dataclasses
from pathlib import Path

from vidprobe.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return a copy of ``base`` with every non-None flag applied.

    Rotation settings (max_bytes, backup_count) have no CLI flag and always
    come from ``base``. The copy is validated again, so a bad flag value
    raises ValueError.

    Example:
        config = get_config()
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            format="json" if log_json else None,
        )
    """
    flags = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    overrides = {name: value for name, value in flags.items() if value is not None}
    return dataclasses.replace(base, **overrides)
