"""Line classification for ffmpeg banner output.

ffmpeg prints one line per container/stream fact. Only two shapes carry
metadata we track::

      Duration: 00:02:17.59, start: 0.000000, bitrate: 11106 kb/s
        Stream #0:1(eng): Video: h264 (High) (avc1 / 0x31637661), ...

Everything else is irrelevant. The patterns below are anchored and contain
no nested quantifiers, so matching is linear in the line length.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta

from vidprobe.domain.enums import LineKind, StreamType
from vidprobe.parsing.errors import MalformedDurationError

DURATION_PATTERN = re.compile(
    r"^\s*Duration:\s*(?P<duration>[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{2})"
)

# The tag between the stream id and the type word varies across ffmpeg
# versions: "(eng)", "[0x1e0](und)", or nothing at all.
STREAM_PATTERN = re.compile(
    r"^\s*Stream #(?P<input>[0-9]+):(?P<index>[0-9]+)(?P<tag>[^:]*):\s*"
    r"(?P<type>\w+):\s*(?P<details>.*)$"
)

_TIMESTAMP_PATTERN = re.compile(
    r"(?P<hours>[0-9]{2}):(?P<minutes>[0-9]{2}):(?P<seconds>[0-9]{2})"
    r"\.(?P<hundredths>[0-9]{2})"
)

_MAX_TIMESTAMP = timedelta(hours=24)


@dataclass(frozen=True)
class ClassifiedLine:
    """Result of classifying one banner line."""

    kind: LineKind
    duration_text: str | None = None
    stream_type: StreamType | None = None
    type_word: str | None = None
    details: str | None = None
    stream_id: tuple[int, int] | None = None


IRRELEVANT_LINE = ClassifiedLine(kind=LineKind.IRRELEVANT)


def classify_line(line: str) -> ClassifiedLine:
    """Classify a single line of ffmpeg banner output.

    Duration lines take priority over stream lines.

    Args:
        line: One line of output, with or without its line terminator.

    Returns:
        ClassifiedLine describing the line. Irrelevant lines return
        IRRELEVANT_LINE.
    """
    duration_match = DURATION_PATTERN.match(line)
    if duration_match:
        return ClassifiedLine(
            kind=LineKind.DURATION,
            duration_text=duration_match.group("duration"),
        )

    stream_match = STREAM_PATTERN.match(line)
    if stream_match:
        type_word = stream_match.group("type")
        return ClassifiedLine(
            kind=LineKind.STREAM,
            stream_type=StreamType.from_word(type_word),
            type_word=type_word,
            details=stream_match.group("details").rstrip(),
            stream_id=(
                int(stream_match.group("input")),
                int(stream_match.group("index")),
            ),
        )

    return IRRELEVANT_LINE


def parse_timestamp(text: str) -> timedelta:
    """Parse a fixed-width ``HH:MM:SS.ff`` timestamp.

    Hours run 00-23, minutes and seconds 00-59. The format is
    locale-invariant: the fractional separator is always a period and the
    fraction is always two digits (hundredths).

    Args:
        text: Timestamp such as "00:02:17.59".

    Returns:
        The timestamp as a timedelta.

    Raises:
        MalformedDurationError: If the text is not a valid timestamp or a
            component is out of range.
    """
    match = _TIMESTAMP_PATTERN.fullmatch(text)
    if match is None:
        raise MalformedDurationError(
            f"Duration {text!r} is not in HH:MM:SS.ff format", value=text
        )

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds"))
    hundredths = int(match.group("hundredths"))

    if hours > 23:
        raise MalformedDurationError(
            f"Duration {text!r} has out-of-range hours: {hours}", value=text
        )
    if minutes > 59:
        raise MalformedDurationError(
            f"Duration {text!r} has out-of-range minutes: {minutes}", value=text
        )
    if seconds > 59:
        raise MalformedDurationError(
            f"Duration {text!r} has out-of-range seconds: {seconds}", value=text
        )

    return timedelta(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        milliseconds=hundredths * 10,
    )


def format_timestamp(value: timedelta) -> str:
    """Format a timedelta as ``HH:MM:SS.ff``.

    Sub-hundredth precision is truncated.

    Args:
        value: Non-negative duration shorter than 24 hours.

    Returns:
        Fixed-width timestamp string.

    Raises:
        ValueError: If the duration is negative or a day or longer.
    """
    if value < timedelta(0) or value >= _MAX_TIMESTAMP:
        raise ValueError(f"Cannot format {value!r} as HH:MM:SS.ff")

    total_hundredths = value // timedelta(milliseconds=10)
    total_seconds, hundredths = divmod(total_hundredths, 100)
    total_minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{hundredths:02d}"
