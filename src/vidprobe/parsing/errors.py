"""Exceptions raised by the vidprobe parsing layer."""


class VidprobeParseError(Exception):
    """Base class for parsing errors."""

    pass


class MalformedDurationError(VidprobeParseError, ValueError):
    """Raised when a duration value has the right shape but is out of range."""

    def __init__(self, message: str, value: str | None = None) -> None:
        self.message = message
        self.value = value
        super().__init__(message)


class ParserClosedError(VidprobeParseError, RuntimeError):
    """Raised when a line is fed to a parser that has already been closed."""

    pass
