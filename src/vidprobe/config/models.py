"""Configuration dataclasses.

Values arrive from the config file, the environment and CLI flags (see
loader.py). Each dataclass checks its own values on construction and
raises ValueError for anything out of range.
"""

from dataclasses import dataclass, field
from pathlib import Path

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMATS = ("text", "json")
ACCEPTANCE_LEVELS = ("good_enough", "complete")


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
    if value.lower() not in choices:
        raise ValueError(f"{name} must be one of {choices}, got {value!r}")


@dataclass
class LoggingConfig:
    """Where and how log records are written."""

    level: str = "info"
    # None means stderr only.
    file: Path | None = None
    format: str = "text"
    # Keep writing to stderr when a file is configured.
    include_stderr: bool = False
    # RotatingFileHandler settings; 10 MiB per file.
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        _check_choice("level", self.level, LOG_LEVELS)
        _check_choice("format", self.format, LOG_FORMATS)
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must not be negative, got {self.backup_count}"
            )


@dataclass
class ParserConfig:
    """Banner parser switches."""

    log_lines: bool = False
    """Pass every raw banner line to the DEBUG log (vidprobe.parsing.lines)."""

    record_unparsable: bool = False
    """Record an UNPARSABLE_LINE issue for each line without metadata."""


@dataclass
class PlaybackConfig:
    """Which completeness predicate makes a descriptor usable.

    ``good_enough`` needs duration, video codec and resolution.
    ``complete`` also needs audio codec, sample rate and frame rate.
    """

    acceptance: str = "good_enough"

    def __post_init__(self) -> None:
        if self.acceptance not in ACCEPTANCE_LEVELS:
            raise ValueError(
                f"acceptance must be one of {ACCEPTANCE_LEVELS}, "
                f"got {self.acceptance!r}"
            )


@dataclass
class VidprobeConfig:
    """Top-level configuration, one attribute per config file section."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
