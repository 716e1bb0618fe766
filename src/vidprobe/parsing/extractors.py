"""Field extractors for stream detail tokens.

Each matcher looks at a single token and returns:

- None when the token does not have the field's shape at all;
- a FieldParseResult with success=False when the shape matched but the
  number could not be used (malformed, overflowing, zero or negative);
- a FieldParseResult with success=True and the parsed value otherwise.

Numbers are parsed with a fixed grammar that always uses "." as the
decimal separator, independent of the host locale.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from vidprobe.domain.enums import IssueKind
from vidprobe.domain.models import ParseIssue, Resolution

T = TypeVar("T")

_DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)
_RESOLUTION_PATTERN = re.compile(r"(?P<width>[0-9]+)x(?P<height>[0-9]+)")

# Dimensions must fit a signed 32-bit integer.
MAX_DIMENSION = 2**31 - 1


@dataclass(frozen=True)
class FieldParseResult(Generic[T]):
    """Result of parsing a field value out of a token.

    Attributes:
        success: True if a usable value was parsed.
        value: The parsed value if successful, None otherwise.
        error: Error message if parsing failed, None otherwise.
    """

    success: bool
    value: T | None
    error: str | None = None


def parse_invariant_float(text: str) -> FieldParseResult[float]:
    """Parse a strictly positive decimal number.

    Args:
        text: Number text such as "48000" or "59.94". Surrounding
            whitespace is ignored.

    Returns:
        FieldParseResult with the value, or an error message if the text is
        not a finite positive decimal.
    """
    candidate = text.strip()
    if not _DECIMAL_PATTERN.fullmatch(candidate):
        return FieldParseResult(
            success=False, value=None, error=f"not a decimal number: {text!r}"
        )

    value = float(candidate)
    if not math.isfinite(value):
        return FieldParseResult(
            success=False, value=None, error=f"number out of range: {text!r}"
        )
    if value <= 0:
        return FieldParseResult(
            success=False, value=None, error=f"number must be positive: {text!r}"
        )
    return FieldParseResult(success=True, value=value)


def _match_unit(token: str, unit: str) -> FieldParseResult[float] | None:
    """Match a "<decimal> <unit>" shape, taking everything before the unit."""
    marker = f" {unit}"
    idx = token.find(marker)
    if idx < 0:
        return None
    return parse_invariant_float(token[:idx])


def match_sample_rate(token: str) -> FieldParseResult[float] | None:
    """Match a sample rate token such as "48000 Hz"."""
    return _match_unit(token, "Hz")


def match_frame_rate(token: str) -> FieldParseResult[float] | None:
    """Match a frame rate token such as "59.94 fps"."""
    return _match_unit(token, "fps")


def _parse_dimension(text: str) -> int | None:
    if len(text.lstrip("0")) > len(str(MAX_DIMENSION)):
        return None
    value = int(text)
    if value <= 0 or value > MAX_DIMENSION:
        return None
    return value


def match_resolution(token: str) -> FieldParseResult[Resolution] | None:
    """Match a resolution such as "1920x1080 [SAR 1:1 DAR 16:9]".

    Only the first "<int>x<int>" occurrence in the token is considered.

    Args:
        token: Content token from a video stream.

    Returns:
        None if the token has no "<int>x<int>" shape, otherwise a
        FieldParseResult that fails when either dimension is zero or too
        large.
    """
    match = _RESOLUTION_PATTERN.search(token)
    if match is None:
        return None

    width = _parse_dimension(match.group("width"))
    height = _parse_dimension(match.group("height"))
    if width is None or height is None:
        return FieldParseResult(
            success=False,
            value=None,
            error=f"invalid resolution: {match.group(0)!r}",
        )
    return FieldParseResult(success=True, value=Resolution(width, height))


def extract_codec(tokens: Sequence[str]) -> str | None:
    """Return the codec label from the first token, or None if it is blank."""
    if not tokens:
        return None
    codec = tokens[0].strip()
    return codec or None


def find_first(
    tokens: Sequence[str],
    matcher: Callable[[str], FieldParseResult[T] | None],
    field_name: str,
) -> tuple[T | None, list[ParseIssue]]:
    """Scan tokens in order and return the first successfully parsed value.

    Shape matches that fail to parse are reported as MALFORMED_NUMBER
    issues and scanning continues with the next token.

    Args:
        tokens: Content tokens of one stream line.
        matcher: Token matcher (e.g., match_sample_rate).
        field_name: Descriptor field name used in issues.

    Returns:
        Tuple of (value or None, issues for rejected matches).
    """
    issues: list[ParseIssue] = []
    for token in tokens:
        result = matcher(token)
        if result is None:
            continue
        if result.success:
            return result.value, issues
        issues.append(
            ParseIssue(
                kind=IssueKind.MALFORMED_NUMBER,
                message=f"Ignoring {field_name}: {result.error}",
                field_name=field_name,
            )
        )
    return None, issues
