"""Domain models for vidprobe.

The MediaDescriptor is the record populated by one parse pass. Every field
starts unset and is set at most once; "unset" is expressed explicitly
(None, or a zero duration) rather than through empty strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from vidprobe.domain.enums import IssueKind


@dataclass(frozen=True)
class Resolution:
    """Video frame size in pixels. Both dimensions are always positive."""

    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate dimensions."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"resolution dimensions must be positive, got "
                f"{self.width}x{self.height}"
            )

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"

    def as_tuple(self) -> tuple[int, int]:
        """Return the resolution as a (width, height) tuple."""
        return (self.width, self.height)


@dataclass
class MediaDescriptor:
    """Metadata extracted from an ffmpeg banner (one per probe)."""

    duration: timedelta = field(default_factory=timedelta)
    audio_codec: str | None = None
    sample_rate_hz: float | None = None
    video_codec: str | None = None
    resolution: Resolution | None = None
    frame_rate_fps: float | None = None

    @property
    def has_duration(self) -> bool:
        """Return True once a positive duration has been recorded."""
        return self.duration > timedelta(0)

    @property
    def duration_seconds(self) -> float:
        """Return the duration in seconds (0.0 when unset)."""
        return self.duration.total_seconds()


@dataclass(frozen=True)
class ParseIssue:
    """A recoverable problem met while parsing a line.

    Attributes:
        kind: What went wrong.
        message: Human-readable description.
        line: The offending input line, when known.
        field_name: Descriptor field affected, when applicable.
    """

    kind: IssueKind
    message: str
    line: str | None = None
    field_name: str | None = None
