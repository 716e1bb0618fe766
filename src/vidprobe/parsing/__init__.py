"""Parsing of ffmpeg banner output into media descriptors.

This module provides:

- MediaInfoParser: Incremental, line-by-line parser for one probe
- parse_lines: One-shot helper returning a ParseResult
- classify_line / segment_details / field matchers: the building blocks
- is_complete / is_good_enough: Completeness predicates

Formatters for descriptors:
- format_human: Human-readable output
- format_json: JSON output
- descriptor_to_dict: Convert MediaDescriptor to dictionary
- log_descriptor: Dump every field to a logger
"""

from vidprobe.parsing.accumulator import apply_stream
from vidprobe.parsing.completeness import is_complete, is_good_enough
from vidprobe.parsing.errors import (
    MalformedDurationError,
    ParserClosedError,
    VidprobeParseError,
)
from vidprobe.parsing.extractors import (
    FieldParseResult,
    match_frame_rate,
    match_resolution,
    match_sample_rate,
    parse_invariant_float,
)
from vidprobe.parsing.formatters import (
    descriptor_to_dict,
    format_human,
    format_json,
    log_descriptor,
)
from vidprobe.parsing.lines import (
    ClassifiedLine,
    classify_line,
    format_timestamp,
    parse_timestamp,
)
from vidprobe.parsing.parser import (
    MediaInfoParser,
    ParseResult,
    log_probe_line,
    parse_lines,
)
from vidprobe.parsing.segmenter import segment_details

__all__ = [
    "MediaInfoParser",
    "ParseResult",
    "parse_lines",
    "log_probe_line",
    # Building blocks
    "ClassifiedLine",
    "classify_line",
    "parse_timestamp",
    "format_timestamp",
    "segment_details",
    "FieldParseResult",
    "parse_invariant_float",
    "match_sample_rate",
    "match_resolution",
    "match_frame_rate",
    "apply_stream",
    # Predicates
    "is_complete",
    "is_good_enough",
    # Errors
    "VidprobeParseError",
    "MalformedDurationError",
    "ParserClosedError",
    # Formatters
    "descriptor_to_dict",
    "format_human",
    "format_json",
    "log_descriptor",
]
