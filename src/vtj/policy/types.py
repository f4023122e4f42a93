"""Rendition policy types.

RenditionSpec entries form a static table; RenditionDecision is computed
once per rendition per job and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RenditionName(Enum):
    """Named output variants produced by the job."""

    OGP = "ogp"  # Link preview copy
    MAIN = "main"  # Viewing page copy


@dataclass(frozen=True)
class RenditionSpec:
    """Target parameters and compliance limits for one rendition."""

    name: RenditionName
    target_max_width: int
    target_max_height: int
    crf: int
    preset: str
    content_type: str
    duration_cap_seconds: int | None = None
    """Output duration cap; None keeps the full source duration."""

    max_compliant_duration_seconds: float | None = None
    """Longest source that may be delivered as-is; None means no limit."""

    max_compliant_size_bytes: int | None = None
    """Largest source that may be delivered as-is; None means no limit."""

    video_codec: str = "h264"
    encoder: str = "libx264"
    container_extension: str = ".mp4"


@dataclass(frozen=True)
class RenditionDecision:
    """Outcome of evaluating a rendition against source metadata."""

    skip: bool
    """True if the source is already compliant and generation is skipped."""

    reason: str
    """Human-readable reason for the decision."""

    args: tuple[str, ...] = field(default_factory=tuple)
    """Encoder arguments (without the output target) when generating."""
