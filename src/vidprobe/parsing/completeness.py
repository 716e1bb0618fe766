"""Completeness predicates over a MediaDescriptor.

Both predicates are pure and may be evaluated at any point of a parse,
including before the banner has been fully read.
"""

from vidprobe.domain.models import MediaDescriptor


def _has_resolution(descriptor: MediaDescriptor) -> bool:
    resolution = descriptor.resolution
    return resolution is not None and resolution.width > 0 and resolution.height > 0


def is_good_enough(descriptor: MediaDescriptor) -> bool:
    """Return True if playback can start with this metadata.

    Requires a positive duration, a video codec and a resolution. Audio
    fields and the frame rate are not needed.
    """
    return (
        descriptor.has_duration
        and descriptor.video_codec is not None
        and _has_resolution(descriptor)
    )


def is_complete(descriptor: MediaDescriptor) -> bool:
    """Return True if every tracked field has been populated."""
    return (
        is_good_enough(descriptor)
        and descriptor.audio_codec is not None
        and (descriptor.sample_rate_hz or 0) > 0
        and (descriptor.frame_rate_fps or 0) > 0
    )
