"""Introspector module.

This module provides media introspection capabilities:

- MediaProbe: Protocol defining the probe interface
- FFprobeIntrospector: Production implementation using ffprobe
- parse_ffprobe_output: Pure parser from ffprobe JSON to MediaMetadata
"""

from vtj.introspector.ffprobe import FFprobeIntrospector, build_probe_args
from vtj.introspector.interface import MediaProbe
from vtj.introspector.parsers import parse_ffprobe_output
from vtj.introspector.types import (
    AudioStreamInfo,
    MediaMetadata,
    ProbeResult,
    VideoStreamInfo,
)

__all__ = [
    "AudioStreamInfo",
    "FFprobeIntrospector",
    "MediaMetadata",
    "MediaProbe",
    "ProbeResult",
    "VideoStreamInfo",
    "build_probe_args",
    "parse_ffprobe_output",
]
