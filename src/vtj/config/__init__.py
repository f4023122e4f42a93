"""Configuration management.

The job reads its inputs and operational settings from environment
variables through EnvReader; load_job_config() validates them into a
JobConfig.
"""

from vtj.config.env import EnvReader
from vtj.config.loader import load_job_config, load_logging_config
from vtj.config.models import JobConfig, LoggingConfig, ToolPathsConfig

__all__ = [
    "EnvReader",
    "JobConfig",
    "LoggingConfig",
    "ToolPathsConfig",
    "load_job_config",
    "load_logging_config",
]
