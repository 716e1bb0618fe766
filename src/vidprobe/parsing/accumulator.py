"""First-wins accumulation of stream fields onto a MediaDescriptor.

Only the first audio stream and the first video stream of a probe
contribute. Once a stream type's codec is recorded, later stream lines of
that type (commentary tracks, alternate angles) are ignored entirely.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from vidprobe.domain.enums import StreamType
from vidprobe.domain.models import MediaDescriptor, ParseIssue
from vidprobe.parsing.extractors import (
    extract_codec,
    find_first,
    match_frame_rate,
    match_resolution,
    match_sample_rate,
)

logger = logging.getLogger(__name__)


def apply_audio_stream(
    descriptor: MediaDescriptor, tokens: Sequence[str]
) -> list[ParseIssue]:
    """Apply an audio stream's tokens to the descriptor.

    Args:
        descriptor: Descriptor under construction.
        tokens: Content tokens from the stream's detail text.

    Returns:
        Issues for rejected sample rate candidates.
    """
    if descriptor.audio_codec is not None:
        logger.debug("Ignoring additional audio stream: %s", ", ".join(tokens))
        return []

    descriptor.audio_codec = extract_codec(tokens)

    sample_rate, issues = find_first(tokens, match_sample_rate, "sample_rate_hz")
    if sample_rate is not None and descriptor.sample_rate_hz is None:
        descriptor.sample_rate_hz = sample_rate
    return issues


def apply_video_stream(
    descriptor: MediaDescriptor, tokens: Sequence[str]
) -> list[ParseIssue]:
    """Apply a video stream's tokens to the descriptor.

    Args:
        descriptor: Descriptor under construction.
        tokens: Content tokens from the stream's detail text.

    Returns:
        Issues for rejected resolution and frame rate candidates.
    """
    if descriptor.video_codec is not None:
        logger.debug("Ignoring additional video stream: %s", ", ".join(tokens))
        return []

    descriptor.video_codec = extract_codec(tokens)

    resolution, issues = find_first(tokens, match_resolution, "resolution")
    if resolution is not None and descriptor.resolution is None:
        descriptor.resolution = resolution

    frame_rate, frame_rate_issues = find_first(
        tokens, match_frame_rate, "frame_rate_fps"
    )
    issues.extend(frame_rate_issues)
    if frame_rate is not None and descriptor.frame_rate_fps is None:
        descriptor.frame_rate_fps = frame_rate
    return issues


def apply_stream(
    descriptor: MediaDescriptor,
    stream_type: StreamType,
    tokens: Sequence[str],
) -> list[ParseIssue]:
    """Merge one stream line into the descriptor.

    Subtitle, attachment, data and unrecognized streams are accepted and
    leave the descriptor unchanged.

    Args:
        descriptor: Descriptor under construction.
        stream_type: Type of the stream line.
        tokens: Content tokens from the stream's detail text.

    Returns:
        Issues for rejected numeric candidates (may be empty).
    """
    if stream_type is StreamType.AUDIO:
        return apply_audio_stream(descriptor, tokens)
    if stream_type is StreamType.VIDEO:
        return apply_video_stream(descriptor, tokens)
    return []
