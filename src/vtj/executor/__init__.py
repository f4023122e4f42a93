"""Executor module: runs ffmpeg and exposes its output as artifacts."""

from vtj.executor.artifacts import (
    InlineArtifact,
    LiveStreamArtifact,
    SizedFileArtifact,
    TranscodeArtifact,
)
from vtj.executor.ffmpeg import FFmpegExecutor, run_capture
from vtj.executor.interface import OutputMode, require_tool

__all__ = [
    "FFmpegExecutor",
    "InlineArtifact",
    "LiveStreamArtifact",
    "OutputMode",
    "SizedFileArtifact",
    "TranscodeArtifact",
    "require_tool",
    "run_capture",
]
