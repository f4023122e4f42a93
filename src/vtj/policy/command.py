"""FFmpeg argument building for renditions.

This module constructs the encoder argument vector for a rendition. The
output target (temp file path or ``pipe:1``) is appended by the executor.
"""

from __future__ import annotations

from vtj.introspector.types import AudioStreamInfo
from vtj.policy.types import RenditionSpec

AUDIO_TRANSCODE_CODEC = "aac"
AUDIO_TRANSCODE_BITRATE = "128k"

FASTSTART_MOVFLAGS = "+faststart"
# Fast-start needs a seekable output; piped output uses fragmented MP4
FRAGMENTED_MOVFLAGS = "+frag_keyframe+empty_moov+default_base_moof"


def build_audio_args(audio: AudioStreamInfo | None) -> list[str]:
    """Build audio codec arguments.

    AAC sources are stream-copied; anything else (including no audio
    stream) is transcoded to AAC at 128 kbps.

    Args:
        audio: First audio stream of the source, or None.

    Returns:
        List of FFmpeg audio arguments.
    """
    if audio is not None and audio.codec == "aac":
        return ["-c:a", "copy"]
    return ["-c:a", AUDIO_TRANSCODE_CODEC, "-b:a", AUDIO_TRANSCODE_BITRATE]


def build_video_filter(spec: RenditionSpec) -> str:
    """Build the scale+pad filter for a rendition.

    Scales down to fit inside the target box preserving aspect ratio (never
    upscales), then pads both dimensions up to even values.
    """
    w = spec.target_max_width
    h = spec.target_max_height
    return (
        f"scale='min({w},iw)':'min({h},ih)':force_original_aspect_ratio=decrease,"
        "pad=ceil(iw/2)*2:ceil(ih/2)*2"
    )


def build_rendition_args(
    spec: RenditionSpec,
    source_url: str,
    audio: AudioStreamInfo | None,
    fragmented: bool = False,
) -> list[str]:
    """Build FFmpeg arguments for generating a rendition.

    Args:
        spec: Rendition to generate.
        source_url: Source media URL or path.
        audio: First audio stream of the source, or None.
        fragmented: True when output goes to a non-seekable pipe.

    Returns:
        Argument vector, excluding the binary and the output target.
    """
    args = ["-hide_banner"]

    # Input option: stop reading the source at the cap
    if spec.duration_cap_seconds is not None:
        args.extend(["-t", str(spec.duration_cap_seconds)])

    args.extend(["-i", source_url])
    args.extend(["-vf", build_video_filter(spec)])
    args.extend(["-c:v", spec.encoder])
    args.extend(["-preset", spec.preset])
    args.extend(["-crf", str(spec.crf)])
    args.extend(
        ["-movflags", FRAGMENTED_MOVFLAGS if fragmented else FASTSTART_MOVFLAGS]
    )
    args.extend(build_audio_args(audio))
    args.extend(["-f", "mp4"])
    return args
