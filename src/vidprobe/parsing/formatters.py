"""Formatters for media descriptors.

Shared by the CLI and by callers that want to log what a probe found.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from vidprobe.domain.models import MediaDescriptor, ParseIssue
from vidprobe.parsing.completeness import is_complete, is_good_enough
from vidprobe.parsing.lines import format_timestamp

logger = logging.getLogger(__name__)

_UNSET = "-"


def _format_number(value: float | None, unit: str) -> str:
    if value is None:
        return _UNSET
    if value == int(value):
        return f"{int(value)} {unit}"
    return f"{value:.3f}".rstrip("0").rstrip(".") + f" {unit}"


def _format_duration(descriptor: MediaDescriptor) -> str:
    if not descriptor.has_duration:
        return _UNSET
    try:
        return format_timestamp(descriptor.duration)
    except ValueError:
        return str(descriptor.duration)


def descriptor_fields(descriptor: MediaDescriptor) -> list[tuple[str, str]]:
    """Return (label, display value) pairs for every descriptor field."""
    return [
        ("Duration", _format_duration(descriptor)),
        ("AudioCodec", descriptor.audio_codec or _UNSET),
        ("SampleRate", _format_number(descriptor.sample_rate_hz, "Hz")),
        ("VideoCodec", descriptor.video_codec or _UNSET),
        ("Resolution", str(descriptor.resolution or _UNSET)),
        ("FrameRate", _format_number(descriptor.frame_rate_fps, "fps")),
    ]


def log_descriptor(
    descriptor: MediaDescriptor,
    log: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> None:
    """Log every descriptor field on its own line.

    Args:
        descriptor: Descriptor to dump.
        log: Logger to write to (defaults to this module's logger).
        level: Log level to use.
    """
    target = log or logger
    for label, value in descriptor_fields(descriptor):
        target.log(level, "%-11s %s", f"{label}:", value)


def format_human(
    descriptor: MediaDescriptor,
    source: str | None = None,
    issues: Sequence[ParseIssue] = (),
) -> str:
    """Format a descriptor for terminal output.

    Args:
        descriptor: Descriptor to format.
        source: Optional name of the probed input, shown as a header.
        issues: Parse issues to list after the fields.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    if source:
        lines.append(f"Source: {source}")
        lines.append("")

    for label, value in descriptor_fields(descriptor):
        lines.append(f"{label + ':':<12}{value}")

    lines.append("")
    verdicts = [
        ("Complete", is_complete(descriptor)),
        ("GoodEnough", is_good_enough(descriptor)),
    ]
    for label, verdict in verdicts:
        lines.append(f"{label + ':':<12}{'yes' if verdict else 'no'}")

    if issues:
        lines.append("")
        lines.append("Issues:")
        for issue in issues:
            lines.append(f"  - [{issue.kind.value}] {issue.message}")

    return "\n".join(lines)


def descriptor_to_dict(descriptor: MediaDescriptor) -> dict[str, Any]:
    """Convert a descriptor to a JSON-serializable dict.

    Args:
        descriptor: Descriptor to convert.

    Returns:
        Dictionary representation. Unset fields are None.
    """
    resolution = descriptor.resolution
    return {
        "duration_seconds": (
            descriptor.duration_seconds if descriptor.has_duration else None
        ),
        "duration": (
            _format_duration(descriptor) if descriptor.has_duration else None
        ),
        "audio_codec": descriptor.audio_codec,
        "sample_rate_hz": descriptor.sample_rate_hz,
        "video_codec": descriptor.video_codec,
        "resolution": (
            {"width": resolution.width, "height": resolution.height}
            if resolution is not None
            else None
        ),
        "frame_rate_fps": descriptor.frame_rate_fps,
        "is_complete": is_complete(descriptor),
        "is_good_enough": is_good_enough(descriptor),
    }


def issue_to_dict(issue: ParseIssue) -> dict[str, Any]:
    """Convert a ParseIssue to a JSON-serializable dict."""
    d: dict[str, Any] = {"kind": issue.kind.value, "message": issue.message}
    if issue.field_name is not None:
        d["field"] = issue.field_name
    if issue.line is not None:
        d["line"] = issue.line
    return d


def format_json(
    descriptor: MediaDescriptor,
    source: str | None = None,
    issues: Sequence[ParseIssue] = (),
) -> str:
    """Format a descriptor as JSON.

    Args:
        descriptor: Descriptor to format.
        source: Optional name of the probed input.
        issues: Parse issues to include.

    Returns:
        JSON string.
    """
    data: dict[str, Any] = {"source": source}
    data.update(descriptor_to_dict(descriptor))
    data["issues"] = [issue_to_dict(i) for i in issues]
    return json.dumps(data, indent=2)
