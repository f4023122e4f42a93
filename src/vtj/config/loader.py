"""Load the job configuration from environment variables.

Job inputs keep the plain names the job has always been deployed with
(ORIGINAL_URL, FILENAME, ...). Operational settings use the VTJ_ prefix.
"""

from __future__ import annotations

import logging

from vtj.config.env import EnvReader
from vtj.config.models import (
    LOG_FORMATS,
    LOG_LEVELS,
    JobConfig,
    LoggingConfig,
    ToolPathsConfig,
)
from vtj.core.exceptions import ConfigError
from vtj.executor.interface import OutputMode

logger = logging.getLogger(__name__)

REQUIRED_VARS = ("ORIGINAL_URL", "FILENAME", "PROBE_DEST_URL")

_TIMEOUT_VARS = {
    "VTJ_HTTP_TIMEOUT": 300.0,
    "VTJ_CONNECT_TIMEOUT": 30.0,
    "VTJ_REPORT_TIMEOUT": 30.0,
}


def load_logging_config(reader: EnvReader) -> LoggingConfig:
    """Build logging settings, ignoring invalid values with a warning."""
    level = reader.get_str("VTJ_LOG_LEVEL", "info") or "info"
    fmt = reader.get_str("VTJ_LOG_FORMAT", "text") or "text"
    if level.casefold() not in LOG_LEVELS:
        logger.warning("Ignoring invalid VTJ_LOG_LEVEL: %s", level)
        level = "info"
    if fmt.casefold() not in LOG_FORMATS:
        logger.warning("Ignoring invalid VTJ_LOG_FORMAT: %s", fmt)
        fmt = "text"
    return LoggingConfig(level=level, format=fmt, file=reader.get_path("VTJ_LOG_FILE"))


def load_job_config(
    reader: EnvReader | None = None,
    require_destinations: bool = True,
) -> JobConfig:
    """Build a JobConfig from the environment.

    Args:
        reader: Environment reader. None reads os.environ.
        require_destinations: False relaxes PROBE_DEST_URL for dry runs.

    Returns:
        Validated job configuration.

    Raises:
        ConfigError: Listing every missing or invalid variable.
    """
    reader = reader or EnvReader()
    problems: list[str] = []

    required = REQUIRED_VARS if require_destinations else REQUIRED_VARS[:2]
    for var in required:
        if reader.get_str(var) is None:
            problems.append(f"{var} is required")

    mode_value = reader.get_str("VTJ_OUTPUT_MODE", OutputMode.FILE.value)
    try:
        output_mode = OutputMode(mode_value.casefold())
    except ValueError:
        problems.append(
            f"VTJ_OUTPUT_MODE must be one of "
            f"{[m.value for m in OutputMode]}, got {mode_value}"
        )
        output_mode = OutputMode.FILE

    temp_dir = reader.get_path("VTJ_TEMP_DIR")
    if temp_dir is not None and not temp_dir.is_dir():
        problems.append(f"VTJ_TEMP_DIR is not a directory: {temp_dir}")

    timeouts: dict[str, float] = {}
    for var, default in _TIMEOUT_VARS.items():
        value = reader.get_float(var, default)
        if not value > 0:
            problems.append(f"{var} must be positive, got {value}")
        timeouts[var] = value

    if problems:
        raise ConfigError(problems)

    return JobConfig(
        source_url=reader.get_str("ORIGINAL_URL"),
        filename=reader.get_str("FILENAME"),
        probe_destination=reader.get_str("PROBE_DEST_URL", ""),
        ogp_destination=reader.get_str("OGP_DEST_URL"),
        main_destination=reader.get_str("MAIN_DEST_URL"),
        report_url=reader.get_str("REPORT_URL"),
        tools=ToolPathsConfig(
            ffmpeg=reader.get_path("VTJ_FFMPEG_PATH"),
            ffprobe=reader.get_path("VTJ_FFPROBE_PATH"),
        ),
        logging=load_logging_config(reader),
        output_mode=output_mode,
        concurrent_renditions=reader.get_bool("VTJ_CONCURRENT_RENDITIONS"),
        temp_dir=temp_dir,
        http_timeout_seconds=timeouts["VTJ_HTTP_TIMEOUT"],
        connect_timeout_seconds=timeouts["VTJ_CONNECT_TIMEOUT"],
        report_timeout_seconds=timeouts["VTJ_REPORT_TIMEOUT"],
    )
