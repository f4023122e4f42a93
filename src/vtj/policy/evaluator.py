"""Rendition decision logic.

Determines whether a rendition must be generated or the source already
satisfies it. Evaluation is pure: the same metadata always yields the same
decision.
"""

from __future__ import annotations

import logging

from vtj.introspector.types import MediaMetadata
from vtj.policy.command import build_rendition_args
from vtj.policy.types import RenditionDecision, RenditionSpec

logger = logging.getLogger(__name__)


def find_noncompliance(
    spec: RenditionSpec,
    metadata: MediaMetadata,
    filename: str,
) -> str | None:
    """Return why the source cannot be used as-is, or None if compliant.

    Missing streams and NaN numeric fields never count as compliant, so the
    container and codec guarantees of the rendition still hold.

    Args:
        spec: Rendition to check against.
        metadata: Parsed source metadata.
        filename: Source filename, used for the container extension.

    Returns:
        Human-readable reason for the first failing condition, or None.
    """
    if not filename.endswith(spec.container_extension):
        return f"container is not {spec.container_extension}"
    if metadata.video is None:
        return "source has no video stream"
    if metadata.video_codec != spec.video_codec:
        return f"video codec {metadata.video_codec} is not {spec.video_codec}"
    if not metadata.video_height <= spec.target_max_height:
        return (
            f"video height {metadata.video_height} exceeds "
            f"{spec.target_max_height}"
        )

    limit = spec.max_compliant_duration_seconds
    # Written as "not <=" so NaN fails the check
    if limit is not None and not metadata.duration_seconds <= limit:
        return f"duration {metadata.duration_seconds}s exceeds {limit}s"

    limit = spec.max_compliant_size_bytes
    if limit is not None and not metadata.size_bytes <= limit:
        return f"size {metadata.size_bytes} bytes exceeds {limit} bytes"

    return None


def is_compliant(spec: RenditionSpec, metadata: MediaMetadata, filename: str) -> bool:
    """True if the source can stand in for the rendition."""
    return find_noncompliance(spec, metadata, filename) is None


def evaluate_rendition(
    spec: RenditionSpec,
    metadata: MediaMetadata,
    *,
    filename: str,
    source_url: str,
    fragmented: bool = False,
) -> RenditionDecision:
    """Decide whether to skip or generate a rendition.

    Args:
        spec: Rendition to evaluate.
        metadata: Parsed source metadata.
        filename: Source filename, used for the container extension.
        source_url: Source media URL, embedded in the encoder arguments.
        fragmented: True when output is streamed to a pipe.

    Returns:
        RenditionDecision with encoder arguments when generating.
    """
    problem = find_noncompliance(spec, metadata, filename)
    if problem is None:
        reason = _compliant_reason(spec)
        logger.debug("Rendition %s compliant: %s", spec.name.value, reason)
        return RenditionDecision(skip=True, reason=reason)

    logger.debug("Rendition %s must be generated: %s", spec.name.value, problem)
    args = build_rendition_args(spec, source_url, metadata.audio, fragmented)
    return RenditionDecision(skip=False, reason=problem, args=tuple(args))


def _compliant_reason(spec: RenditionSpec) -> str:
    parts = [
        f"already {spec.video_codec}",
        f"{spec.target_max_height}p or lower",
    ]
    if spec.max_compliant_duration_seconds is not None:
        parts.append(f"{spec.max_compliant_duration_seconds:g}s or shorter")
    if spec.max_compliant_size_bytes is not None:
        parts.append(f"{spec.max_compliant_size_bytes // (1024 * 1024)}MB or smaller")
    return "source is " + ", ".join(parts)
