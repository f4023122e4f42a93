"""Environment variable reader with dependency injection support.

The job is configured entirely through its environment. EnvReader reads
and converts values, and accepts an injected mapping so tests never touch
os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        reader = EnvReader(env={"VTJ_HTTP_TIMEOUT": "30"})
        reader.get_float("VTJ_HTTP_TIMEOUT")  # 30.0
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string, treating an empty value as unset.

        Destinations such as OGP_DEST_URL are disabled by leaving them
        empty, so "" and missing mean the same thing.
        """
        value = self._env.get(var)
        if value is None or value.strip() == "":
            return default
        return value.strip()

    def get_float(self, var: str, default: float | None = None) -> float | None:
        """Get a float, or default if unset or invalid (with a warning)."""
        value = self.get_str(var)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool = False) -> bool:
        """Get a boolean. "true", "1", "yes" and "on" are true."""
        value = self.get_str(var)
        if value is None:
            return default
        return value.lower() in _TRUE_VALUES

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path with tilde expansion, or default if unset."""
        value = self.get_str(var)
        if value is None:
            return default
        return Path(value).expanduser()
