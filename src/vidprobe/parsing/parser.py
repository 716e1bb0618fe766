"""Incremental parser for ffmpeg banner output.

One MediaInfoParser handles one probe. Lines must be fed in the order the
external process emitted them: the first audio and video stream lines
win, so reordering lines changes the result.

Example:
    parser = MediaInfoParser()
    for line, is_error in read_banner():
        parser.feed_line(line, is_error)
        if parser.is_good_enough():
            break
    parser.close()
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from vidprobe.domain.enums import IssueKind, LineKind, StreamType
from vidprobe.domain.models import MediaDescriptor, ParseIssue
from vidprobe.parsing.accumulator import apply_stream
from vidprobe.parsing.completeness import is_complete, is_good_enough
from vidprobe.parsing.errors import MalformedDurationError, ParserClosedError
from vidprobe.parsing.lines import ClassifiedLine, classify_line, parse_timestamp
from vidprobe.parsing.segmenter import segment_details

logger = logging.getLogger(__name__)
line_logger = logging.getLogger("vidprobe.parsing.lines")

LineHook = Callable[[str, bool], None]


def log_probe_line(line: str, is_error: bool) -> None:
    """Default line hook: log the raw line at DEBUG with its channel."""
    line_logger.debug(
        "%s",
        line.rstrip("\r\n"),
        extra={"channel": "stderr" if is_error else "stdout"},
    )


@dataclass
class ParseResult:
    """Outcome of parsing a complete banner."""

    descriptor: MediaDescriptor
    issues: list[ParseIssue] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """Return True if every tracked field is populated."""
        return is_complete(self.descriptor)

    @property
    def is_good_enough(self) -> bool:
        """Return True if the descriptor is usable for playback."""
        return is_good_enough(self.descriptor)

    @property
    def duration_error(self) -> ParseIssue | None:
        """Return the first malformed duration issue, if any."""
        return next(
            (i for i in self.issues if i.kind is IssueKind.MALFORMED_DURATION),
            None,
        )


class MediaInfoParser:
    """Stateful line-by-line parser producing a MediaDescriptor."""

    def __init__(
        self,
        line_hook: LineHook | None = None,
        record_unparsable: bool = False,
    ) -> None:
        """Initialize the parser with an empty descriptor.

        Args:
            line_hook: Optional callable invoked with every raw line and its
                is_error flag before parsing. Pass log_probe_line to log
                lines at DEBUG level.
            record_unparsable: Also record an UNPARSABLE_LINE issue for every
                line that carries no metadata. Off by default since most of
                the banner is irrelevant.
        """
        self._descriptor = MediaDescriptor()
        self._issues: list[ParseIssue] = []
        self._line_hook = line_hook
        self._record_unparsable = record_unparsable
        self._closed = False
        self.lines_seen = 0
        self.lines_ignored = 0

    @property
    def descriptor(self) -> MediaDescriptor:
        """The descriptor being populated by this parser."""
        return self._descriptor

    @property
    def issues(self) -> list[ParseIssue]:
        """Issues recorded so far, in input order."""
        return list(self._issues)

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._closed

    def close(self) -> MediaDescriptor:
        """Stop accepting input and return the final descriptor."""
        self._closed = True
        return self._descriptor

    def is_complete(self) -> bool:
        """Return True if every tracked field is populated."""
        return is_complete(self._descriptor)

    def is_good_enough(self) -> bool:
        """Return True if the descriptor is usable for playback."""
        return is_good_enough(self._descriptor)

    def feed_line(self, line: str, is_error: bool = False) -> ParseIssue | None:
        """Parse one line of banner output.

        Args:
            line: Raw output line.
            is_error: True if the line came from the diagnostic channel
                (stderr). Only forwarded to the line hook.

        Returns:
            A MALFORMED_DURATION issue if the line carried an invalid
            duration, otherwise None. Other issues are only recorded in
            ``issues``.

        Raises:
            ParserClosedError: If the parser has been closed.
        """
        if self._closed:
            raise ParserClosedError("Cannot feed lines to a closed parser")

        self.lines_seen += 1
        if self._line_hook is not None:
            self._line_hook(line, is_error)

        classified = classify_line(line)
        if classified.kind is LineKind.DURATION:
            return self._apply_duration(classified, line)
        if classified.kind is LineKind.STREAM:
            self._apply_stream(classified, line)
            return None

        self.lines_ignored += 1
        if self._record_unparsable:
            self._record(
                ParseIssue(
                    kind=IssueKind.UNPARSABLE_LINE,
                    message="Line carries no metadata",
                ),
                line,
            )
        return None

    def feed_lines(
        self, lines: Iterable[str | tuple[str, bool]]
    ) -> list[ParseIssue]:
        """Feed several lines in order.

        Args:
            lines: Plain strings (treated as stdout lines) or
                (line, is_error) pairs.

        Returns:
            All issues recorded while feeding these lines.
        """
        start = len(self._issues)
        for item in lines:
            if isinstance(item, tuple):
                self.feed_line(item[0], item[1])
            else:
                self.feed_line(item)
        return self._issues[start:]

    def _record(self, issue: ParseIssue, line: str) -> ParseIssue:
        issue = dataclasses.replace(issue, line=line.rstrip("\r\n"))
        self._issues.append(issue)
        return issue

    def _apply_duration(
        self, classified: ClassifiedLine, line: str
    ) -> ParseIssue | None:
        text = classified.duration_text or ""
        try:
            duration = parse_timestamp(text)
        except MalformedDurationError as e:
            logger.warning("Malformed duration: %s", e.message)
            return self._record(
                ParseIssue(
                    kind=IssueKind.MALFORMED_DURATION,
                    message=e.message,
                    field_name="duration",
                ),
                line,
            )

        if self._descriptor.has_duration:
            logger.debug("Ignoring additional duration %s", text)
            return None
        self._descriptor.duration = duration
        logger.debug("Duration: %s", text)
        return None

    def _apply_stream(self, classified: ClassifiedLine, line: str) -> None:
        stream_type = classified.stream_type or StreamType.UNKNOWN
        tokens = segment_details(classified.details or "")
        issues = apply_stream(self._descriptor, stream_type, tokens)
        for issue in issues:
            logger.info("%s", issue.message)
            self._record(issue, line)


def parse_lines(
    lines: Iterable[str | tuple[str, bool]],
    line_hook: LineHook | None = None,
) -> ParseResult:
    """Parse a complete banner in one call.

    Args:
        lines: Banner lines in emission order, as strings or
            (line, is_error) pairs.
        line_hook: Optional raw line hook.

    Returns:
        ParseResult with the closed parser's descriptor and all issues.
    """
    parser = MediaInfoParser(line_hook=line_hook)
    parser.feed_lines(lines)
    return ParseResult(descriptor=parser.close(), issues=parser.issues)
