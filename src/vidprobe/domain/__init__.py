"""Domain types for vidprobe.

Models and enums shared by the parser, formatters and CLI.
"""

from vidprobe.domain.enums import IssueKind, LineKind, StreamType
from vidprobe.domain.models import MediaDescriptor, ParseIssue, Resolution

__all__ = [
    "IssueKind",
    "LineKind",
    "MediaDescriptor",
    "ParseIssue",
    "Resolution",
    "StreamType",
]
