"""Centralized exit codes for the CLI.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Configuration errors
    30-39: Tool errors
    40-49: Operation errors
    50-59: Analysis errors
"""

from enum import IntEnum

from vtj.core.exceptions import (
    ConfigError,
    ExternalToolFailure,
    ParseFailure,
    ToolNotAvailableError,
    TransportFailure,
)


class ExitCode(IntEnum):
    """Exit codes for vtj commands."""

    SUCCESS = 0

    GENERAL_ERROR = 1
    INTERRUPTED = 2

    CONFIG_ERROR = 11

    TOOL_NOT_AVAILABLE = 30

    TOOL_FAILED = 40  # ffprobe/ffmpeg exited non-zero
    TRANSPORT_FAILED = 41  # Upload or local write failed

    PARSE_ERROR = 51


_ERROR_CODES: tuple[tuple[type[Exception], ExitCode], ...] = (
    (ConfigError, ExitCode.CONFIG_ERROR),
    (ToolNotAvailableError, ExitCode.TOOL_NOT_AVAILABLE),
    (ExternalToolFailure, ExitCode.TOOL_FAILED),
    (TransportFailure, ExitCode.TRANSPORT_FAILED),
    (ParseFailure, ExitCode.PARSE_ERROR),
)


def exit_code_for(error: BaseException) -> ExitCode:
    """Map an exception to the exit code the process should return."""
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.GENERAL_ERROR
