"""Tests for tool path resolution."""

from pathlib import Path
from unittest.mock import patch

import pytest

from vtj.core.exceptions import ToolNotAvailableError
from vtj.executor.interface import require_tool


def test_configured_executable_is_used(make_ffprobe) -> None:
    path = make_ffprobe(text="{}")
    assert require_tool("ffprobe", path) == path


def test_configured_non_executable_raises(tmp_path: Path) -> None:
    path = tmp_path / "ffmpeg"
    path.write_text("not executable")
    with pytest.raises(ToolNotAvailableError, match="not an executable"):
        require_tool("ffmpeg", path)


def test_path_lookup() -> None:
    with patch("vtj.executor.interface.shutil.which", return_value="/usr/bin/ffmpeg"):
        assert require_tool("ffmpeg") == Path("/usr/bin/ffmpeg")


def test_missing_from_path_raises() -> None:
    with patch("vtj.executor.interface.shutil.which", return_value=None):
        with pytest.raises(ToolNotAvailableError, match="VTJ_FFMPEG_PATH"):
            require_tool("ffmpeg")
