"""Tests for job context setup."""

from pathlib import Path

import pytest

from vtj.config.models import JobConfig, ToolPathsConfig
from vtj.core.exceptions import ToolNotAvailableError
from vtj.jobs.orchestrator import open_job_context


def make_config(ffprobe: Path, ffmpeg: Path, **overrides) -> JobConfig:
    values = {
        "source_url": "https://media.example.com/clip.mp4",
        "filename": "clip.mp4",
        "probe_destination": "",
        "tools": ToolPathsConfig(ffmpeg=ffmpeg, ffprobe=ffprobe),
    }
    values.update(overrides)
    return JobConfig(**values)


@pytest.mark.asyncio
class TestOpenJobContext:
    """Tests for open_job_context."""

    async def test_client_timeouts_are_bounded_by_default(
        self, make_ffprobe, make_ffmpeg
    ) -> None:
        config = make_config(make_ffprobe("h264_480p_aac"), make_ffmpeg().path)

        async with open_job_context(config) as context:
            timeout = context.client.timeout

        assert timeout.connect == 30.0
        assert timeout.read == 300.0
        assert timeout.write == 300.0
        assert timeout.pool == 300.0

    async def test_configured_timeouts(self, make_ffprobe, make_ffmpeg) -> None:
        config = make_config(
            make_ffprobe("h264_480p_aac"),
            make_ffmpeg().path,
            http_timeout_seconds=60.0,
            connect_timeout_seconds=5.0,
        )

        async with open_job_context(config) as context:
            assert context.client.timeout.connect == 5.0
            assert context.client.timeout.read == 60.0

    async def test_missing_encoder_fails_fast(self, make_ffprobe, tmp_path) -> None:
        config = make_config(make_ffprobe("h264_480p_aac"), tmp_path / "no-ffmpeg")

        with pytest.raises(ToolNotAvailableError, match="ffmpeg"):
            async with open_job_context(config):
                pass

    async def test_encoder_not_required_for_dry_runs(
        self, make_ffprobe, tmp_path
    ) -> None:
        config = make_config(make_ffprobe("h264_480p_aac"), tmp_path / "no-ffmpeg")

        async with open_job_context(config, require_encoder=False) as context:
            assert context.executor is None
