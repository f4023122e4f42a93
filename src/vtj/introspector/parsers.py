"""Pure parsing functions for ffprobe JSON output.

These functions transform ffprobe JSON text into MediaMetadata.
All functions are pure (no I/O, no side effects) for easy testing.
"""

import json
import logging
import math

from vtj.core.exceptions import ParseFailure
from vtj.introspector.types import AudioStreamInfo, MediaMetadata, VideoStreamInfo

logger = logging.getLogger(__name__)


def parse_float_field(value: object, field_name: str) -> float:
    """Parse a numeric string field from ffprobe.

    ffprobe reports format duration and size as strings (e.g. "60.000").

    Args:
        value: Raw field value.
        field_name: Field name for warning messages.

    Returns:
        Parsed float, or NaN if the value is missing or unparsable.
    """
    if value is None:
        logger.warning("ffprobe output has no %s", field_name)
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Unparsable %s in ffprobe output: %r", field_name, value)
        return math.nan


def validate_positive_int(value: object, field_name: str) -> int | None:
    """Return value if it is a non-negative int, else None (with a warning)."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning(
            "Expected int for %s, got %s", field_name, type(value).__name__
        )
        return None
    if value < 0:
        logger.warning("Invalid negative %s: %d", field_name, value)
        return None
    return value


def find_stream(streams: list[dict], codec_type: str) -> dict | None:
    """Return the first stream of the given codec_type, or None."""
    for stream in streams:
        if isinstance(stream, dict) and stream.get("codec_type") == codec_type:
            return stream
    return None


def parse_video_stream(stream: dict | None) -> VideoStreamInfo | None:
    if stream is None:
        return None
    return VideoStreamInfo(
        codec=stream.get("codec_name"),
        width=validate_positive_int(stream.get("width"), "width"),
        height=validate_positive_int(stream.get("height"), "height"),
    )


def parse_audio_stream(stream: dict | None) -> AudioStreamInfo | None:
    if stream is None:
        return None
    return AudioStreamInfo(
        codec=stream.get("codec_name"),
        channels=validate_positive_int(stream.get("channels"), "channels"),
    )


def parse_ffprobe_output(raw_text: str) -> MediaMetadata:
    """Parse ffprobe ``-show_format -show_streams`` JSON output.

    Args:
        raw_text: Complete stdout of ffprobe.

    Returns:
        MediaMetadata summary.

    Raises:
        ParseFailure: If the text is not JSON or lacks the format/streams
            sections.
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise ParseFailure(f"Invalid ffprobe output: {e}") from e

    if not isinstance(data, dict):
        raise ParseFailure("Invalid ffprobe output: expected a JSON object")
    if not isinstance(data.get("streams"), list):
        raise ParseFailure(
            "Missing 'streams' in ffprobe output. "
            "Source may be corrupted or not a valid media file."
        )
    if not isinstance(data.get("format"), dict):
        raise ParseFailure(
            "Missing 'format' in ffprobe output. "
            "Source may be corrupted or not a valid media file."
        )

    fmt = data["format"]
    streams = data["streams"]

    return MediaMetadata(
        duration_seconds=parse_float_field(fmt.get("duration"), "duration"),
        size_bytes=parse_float_field(fmt.get("size"), "size"),
        format_name=fmt.get("format_name"),
        video=parse_video_stream(find_stream(streams, "video")),
        audio=parse_audio_stream(find_stream(streams, "audio")),
    )
