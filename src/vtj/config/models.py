"""Configuration data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from vtj.executor.interface import OutputMode
from vtj.policy.types import RenditionName

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMATS = ("text", "json")


@dataclass(frozen=True)
class ToolPathsConfig:
    """External tool paths. None means look the tool up in PATH."""

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass(frozen=True)
class LoggingConfig:
    """Logging output settings."""

    level: str = "info"
    format: str = "text"
    file: Path | None = None
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 3

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.casefold() not in LOG_LEVELS:
            raise ValueError(f"level must be one of {LOG_LEVELS}, got {self.level}")
        if self.format.casefold() not in LOG_FORMATS:
            raise ValueError(
                f"format must be one of {LOG_FORMATS}, got {self.format}"
            )


@dataclass(frozen=True)
class JobConfig:
    """Everything one transcode job needs to run."""

    source_url: str
    filename: str
    probe_destination: str
    ogp_destination: str | None = None
    main_destination: str | None = None
    report_url: str | None = None

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    output_mode: OutputMode = OutputMode.FILE
    concurrent_renditions: bool = False
    temp_dir: Path | None = None
    http_timeout_seconds: float = 300.0
    """Idle timeout per network read or write, not a limit on upload length."""
    connect_timeout_seconds: float = 30.0
    report_timeout_seconds: float = 30.0

    def destination_for(self, name: RenditionName) -> str | None:
        """Destination of a rendition, or None when it is disabled."""
        if name == RenditionName.OGP:
            return self.ogp_destination
        return self.main_destination
