"""Typed access to VIDPROBE_* environment variables.

EnvReader wraps a mapping (os.environ by default) so configuration code
can be exercised in tests with a plain dict.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class EnvReader:
    """Read environment variables as str, bool or Path.

    Every getter returns its ``default`` when the variable is unset.

    Example:
        reader = EnvReader(env={"VIDPROBE_LOG_LINES": "yes"})
        reader.get_bool("VIDPROBE_LOG_LINES")  # True
        reader.get_str("VIDPROBE_LOG_LEVEL", "info")  # "info"
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Return the raw value. An empty string counts as set."""
        return self._env.get(var, default)

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Return True for true/1/yes/on (any case) and False for anything else."""
        raw = self._env.get(var)
        if raw is None:
            return default
        return raw.strip().lower() in _TRUE_VALUES

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Return the value as a user-expanded Path. Empty counts as unset."""
        raw = self._env.get(var, "")
        return Path(raw).expanduser() if raw else default
