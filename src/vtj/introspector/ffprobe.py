"""FFprobe-based implementation of the MediaProbe protocol."""

from __future__ import annotations

import logging
from pathlib import Path

from vtj.executor.ffmpeg import run_capture
from vtj.introspector.parsers import parse_ffprobe_output
from vtj.introspector.types import ProbeResult

logger = logging.getLogger(__name__)


def build_probe_args(source_url: str) -> list[str]:
    """Return the fixed ffprobe argument template for a source."""
    return [
        "-hide_banner",
        "-i",
        source_url,
        "-print_format",
        "json",
        "-show_format",
        "-show_streams",
    ]


class FFprobeIntrospector:
    """ffprobe-based implementation of MediaProbe.

    Captures the complete JSON document from stdout; ffprobe's stderr is
    inherited so its diagnostics reach the job's log stream.
    """

    def __init__(self, ffprobe_path: Path) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Resolved path to the ffprobe executable.
        """
        self._ffprobe_path = ffprobe_path

    async def probe(self, source_url: str) -> ProbeResult:
        """Probe a source and parse the result.

        Args:
            source_url: URL or path of the source media.

        Returns:
            ProbeResult with the raw JSON text and parsed metadata.

        Raises:
            ExternalToolFailure: If ffprobe exits non-zero.
            ParseFailure: If the output is not valid ffprobe JSON.
        """
        stdout = await run_capture(
            self._ffprobe_path, build_probe_args(source_url), tool="ffprobe"
        )
        raw_text = stdout.decode("utf-8", errors="replace")
        logger.debug("ffprobe returned %d bytes", len(stdout))
        return ProbeResult(raw_text=raw_text, metadata=parse_ffprobe_output(raw_text))
