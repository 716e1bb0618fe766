"""vidprobe - incremental parser for ffmpeg diagnostic banners.

Turns the line-oriented text ffmpeg prints for ``-i <file>`` into a typed
media descriptor and decides whether that metadata is usable for playback.
"""

__version__ = "0.1.0"
