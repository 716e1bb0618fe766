"""Domain enums for vidprobe."""

from enum import Enum


class LineKind(Enum):
    """Classification of a single banner line."""

    DURATION = "duration"  # "  Duration: 00:02:17.59, start: ..."
    STREAM = "stream"  # "    Stream #0:0(eng): Audio: ..."
    IRRELEVANT = "irrelevant"  # Everything else


class StreamType(Enum):
    """Elementary stream type as announced on a stream line.

    Only AUDIO and VIDEO contribute fields to the descriptor. The other
    members are recognized so they can be skipped without being treated
    as errors.
    """

    AUDIO = "Audio"
    VIDEO = "Video"
    SUBTITLE = "Subtitle"
    ATTACHMENT = "Attachment"
    DATA = "Data"
    UNKNOWN = "Unknown"

    @classmethod
    def from_word(cls, word: str) -> "StreamType":
        """Map the type word from a stream line to a StreamType.

        Args:
            word: Type word as printed by ffmpeg (e.g., "Audio").

        Returns:
            Matching StreamType, or UNKNOWN for unrecognized words.
        """
        for member in cls:
            if member.value == word:
                return member
        return cls.UNKNOWN


class IssueKind(Enum):
    """Kinds of recoverable problems met while parsing."""

    UNPARSABLE_LINE = "unparsable_line"
    MALFORMED_DURATION = "malformed_duration"
    MALFORMED_NUMBER = "malformed_number"
