"""Media metadata types produced by introspection."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class VideoStreamInfo:
    """First video stream of the source."""

    codec: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class AudioStreamInfo:
    """First audio stream of the source."""

    codec: str | None = None
    channels: int | None = None


@dataclass(frozen=True)
class MediaMetadata:
    """Container and stream summary of a source file.

    Absent streams are None. Unparsable numeric fields are NaN so that every
    comparison against a limit evaluates to False.
    """

    duration_seconds: float = math.nan
    size_bytes: float = math.nan
    format_name: str | None = None
    video: VideoStreamInfo | None = None
    audio: AudioStreamInfo | None = None

    @property
    def video_height(self) -> int:
        """Video height with a missing stream or field treated as 0."""
        if self.video is None or self.video.height is None:
            return 0
        return self.video.height

    @property
    def video_codec(self) -> str | None:
        return self.video.codec if self.video is not None else None

    @property
    def audio_codec(self) -> str | None:
        return self.audio.codec if self.audio is not None else None


@dataclass(frozen=True)
class ProbeResult:
    """Raw ffprobe output together with its parsed summary."""

    raw_text: str
    metadata: MediaMetadata
