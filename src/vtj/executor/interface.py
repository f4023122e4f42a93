"""Executor output modes and tool path resolution."""

from __future__ import annotations

import os
import shutil
from enum import Enum
from pathlib import Path

from vtj.core.exceptions import ToolNotAvailableError


class OutputMode(Enum):
    """How the encoder hands its output to the job."""

    FILE = "file"  # Sized temporary file, exact Content-Length
    STREAM = "stream"  # Live stdout pipe, unknown length


def require_tool(name: str, configured: Path | None = None) -> Path:
    """Resolve the path to an external tool.

    Args:
        name: Executable name looked up in PATH (e.g. "ffmpeg").
        configured: Explicitly configured path, used instead of PATH.

    Returns:
        Path to the executable.

    Raises:
        ToolNotAvailableError: If the tool cannot be found or run.
    """
    if configured is not None:
        if configured.is_file() and os.access(configured, os.X_OK):
            return configured
        raise ToolNotAvailableError(
            f"Configured {name} path is not an executable file: {configured}"
        )

    found = shutil.which(name)
    if found is None:
        raise ToolNotAvailableError(
            f"{name} is not installed or not in PATH. "
            f"Install ffmpeg or set VTJ_{name.upper()}_PATH."
        )
    return Path(found)
