"""FFmpeg process execution.

Runs external tools as child processes without blocking the event loop.
The child's stderr is inherited so encoder diagnostics go straight to the
job's own stderr, never mixed with artifact bytes.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from pathlib import Path

from vtj.core.exceptions import ExternalToolFailure, ToolNotAvailableError
from vtj.executor.artifacts import (
    LiveStreamArtifact,
    SizedFileArtifact,
    TranscodeArtifact,
    terminate_process,
)
from vtj.executor.interface import OutputMode

logger = logging.getLogger(__name__)

PIPE_OUTPUT = "pipe:1"


async def _spawn(
    binary: Path,
    args: Sequence[str],
    tool: str,
    stdout: int | None,
) -> asyncio.subprocess.Process:
    cmd = [str(binary), *args]
    logger.debug("Executing command: %s", " ".join(cmd), extra={"tool": tool})
    try:
        return await asyncio.create_subprocess_exec(  # nosec B603
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=stdout,
            stderr=None,
        )
    except OSError as e:
        raise ToolNotAvailableError(f"Cannot run {tool} ({binary}): {e}") from e


async def _wait(process: asyncio.subprocess.Process) -> int:
    """Wait for exit, killing the process if the wait is cancelled."""
    try:
        return await process.wait()
    except asyncio.CancelledError:
        await terminate_process(process)
        raise


async def run_capture(binary: Path, args: Sequence[str], tool: str) -> bytes:
    """Run a tool and capture its entire stdout in memory.

    Only suitable for small outputs such as probe JSON.

    Args:
        binary: Path to the executable.
        args: Arguments after the binary.
        tool: Tool name for errors and logs.

    Returns:
        Captured stdout bytes.

    Raises:
        ExternalToolFailure: If the tool exits non-zero.
        ToolNotAvailableError: If the tool cannot be started.
    """
    process = await _spawn(binary, args, tool, asyncio.subprocess.PIPE)
    try:
        stdout, _ = await process.communicate()
    except asyncio.CancelledError:
        await terminate_process(process)
        raise
    if process.returncode != 0:
        raise ExternalToolFailure(tool, process.returncode)
    return stdout


class FFmpegExecutor:
    """Runs ffmpeg and exposes its output as a TranscodeArtifact.

    Example:
        async with executor.execute(args, OutputMode.FILE) as artifact:
            await sink.deliver(target, artifact)
    """

    def __init__(self, ffmpeg_path: Path, temp_dir: Path | None = None) -> None:
        """Initialize the executor.

        Args:
            ffmpeg_path: Resolved path to the ffmpeg executable.
            temp_dir: Directory for sized-file output. None uses the system
                temp directory.
        """
        self._ffmpeg_path = ffmpeg_path
        self._temp_dir = temp_dir

    @asynccontextmanager
    async def execute(
        self,
        args: Sequence[str],
        mode: OutputMode = OutputMode.FILE,
    ) -> AsyncIterator[TranscodeArtifact]:
        """Run ffmpeg and yield its output artifact.

        The artifact is disposed when the block exits, whether delivery
        succeeded, failed or was cancelled.

        Args:
            args: Encoder arguments without the binary and output target.
            mode: FILE waits for the encoder and yields a sized temp file;
                STREAM yields the live stdout pipe immediately.

        Yields:
            The encoder output artifact.

        Raises:
            ExternalToolFailure: If ffmpeg exits non-zero (FILE mode here,
                STREAM mode while the artifact is consumed).
        """
        if mode == OutputMode.STREAM:
            artifact: TranscodeArtifact = await self._start_stream(args)
        else:
            artifact = await self._run_to_file(args)
        try:
            yield artifact
        finally:
            await artifact.dispose()

    async def _start_stream(self, args: Sequence[str]) -> LiveStreamArtifact:
        process = await _spawn(
            self._ffmpeg_path,
            ["-y", *args, PIPE_OUTPUT],
            "ffmpeg",
            asyncio.subprocess.PIPE,
        )
        logger.info(
            "Encoder started, streaming output (pid %s)",
            process.pid,
            extra={"tool": "ffmpeg", "pid": process.pid},
        )
        return LiveStreamArtifact(process, "ffmpeg")

    async def _run_to_file(self, args: Sequence[str]) -> SizedFileArtifact:
        fd, name = tempfile.mkstemp(suffix=".tmp", dir=self._temp_dir)
        os.close(fd)
        path = Path(name)
        try:
            process = await _spawn(
                self._ffmpeg_path,
                ["-y", *args, str(path)],
                "ffmpeg",
                asyncio.subprocess.DEVNULL,
            )
            returncode = await _wait(process)
            if returncode != 0:
                raise ExternalToolFailure("ffmpeg", returncode)
            size = path.stat().st_size
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.info(
            "Encoder finished, output is %d bytes",
            size,
            extra={"tool": "ffmpeg", "bytes_written": size},
        )
        return SizedFileArtifact(path, size)
