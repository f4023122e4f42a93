"""Rendition policy: static rendition table and skip/generate decisions."""

from vtj.policy.command import (
    build_audio_args,
    build_rendition_args,
    build_video_filter,
)
from vtj.policy.evaluator import evaluate_rendition, find_noncompliance, is_compliant
from vtj.policy.renditions import (
    MAIN_RENDITION,
    OGP_RENDITION,
    PROBE_CONTENT_TYPE,
    RENDITIONS,
)
from vtj.policy.types import RenditionDecision, RenditionName, RenditionSpec

__all__ = [
    "MAIN_RENDITION",
    "OGP_RENDITION",
    "PROBE_CONTENT_TYPE",
    "RENDITIONS",
    "RenditionDecision",
    "RenditionName",
    "RenditionSpec",
    "build_audio_args",
    "build_rendition_args",
    "build_video_filter",
    "evaluate_rendition",
    "find_noncompliance",
    "is_compliant",
]
