"""Transcode artifacts.

An artifact is the encoder output handed to exactly one delivery. It is a
tagged variant: InlineArtifact (bytes in memory), SizedFileArtifact (temp
file with exact size) or LiveStreamArtifact (encoder stdout of unknown
length). All expose ``size``, ``chunks()`` and an idempotent ``dispose()``.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from pathlib import Path

from vtj.core.exceptions import ExternalToolFailure

logger = logging.getLogger(__name__)

CHUNK_SIZE = 256 * 1024


class TranscodeArtifact(ABC):
    """Base class for encoder output handed to a delivery sink."""

    kind: str = "artifact"

    def __init__(self) -> None:
        self._consumed = False
        self._disposed = False

    @property
    @abstractmethod
    def size(self) -> int | None:
        """Total byte length, or None when unknown."""

    @property
    def disposed(self) -> bool:
        return self._disposed

    def chunks(self) -> AsyncIterator[bytes]:
        """Iterate the artifact bytes. May be called only once.

        Raises:
            RuntimeError: If the artifact was already consumed or disposed.
        """
        if self._disposed:
            raise RuntimeError(f"{self.kind} artifact already disposed")
        if self._consumed:
            raise RuntimeError(f"{self.kind} artifact already consumed")
        self._consumed = True
        return self._iter_chunks()

    @abstractmethod
    def _iter_chunks(self) -> AsyncIterator[bytes]: ...

    async def dispose(self) -> None:
        """Release underlying resources. Runs its action exactly once."""
        if self._disposed:
            return
        self._disposed = True
        await self._release()

    async def _release(self) -> None:
        """Release hook for subclasses."""


class InlineArtifact(TranscodeArtifact):
    """Bytes already held in memory (e.g. probe JSON)."""

    kind = "inline"

    def __init__(self, data: bytes) -> None:
        super().__init__()
        self.data = data

    @classmethod
    def from_text(cls, text: str) -> InlineArtifact:
        return cls(text.encode("utf-8"))

    @property
    def size(self) -> int:
        return len(self.data)

    async def _iter_chunks(self) -> AsyncIterator[bytes]:
        for offset in range(0, len(self.data), CHUNK_SIZE):
            yield self.data[offset : offset + CHUNK_SIZE]


class SizedFileArtifact(TranscodeArtifact):
    """Finished encoder output in a temporary file.

    Disposal deletes the file.
    """

    kind = "sized-file"

    def __init__(self, path: Path, size: int) -> None:
        super().__init__()
        self.path = path
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    async def _iter_chunks(self) -> AsyncIterator[bytes]:
        f = await asyncio.to_thread(open, self.path, "rb")
        try:
            while True:
                chunk = await asyncio.to_thread(f.read, CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        finally:
            f.close()

    async def _release(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
            logger.debug("Removed temp file %s", self.path)
        except OSError as e:
            logger.warning("Could not remove temp file %s: %s", self.path, e)


class LiveStreamArtifact(TranscodeArtifact):
    """Encoder stdout consumed while the encoder is still running.

    The encoder's exit code is checked once stdout reaches EOF; a non-zero
    exit fails the consumer with ExternalToolFailure. Disposal kills the
    encoder if it is still running.
    """

    kind = "live-stream"

    def __init__(self, process: asyncio.subprocess.Process, tool: str) -> None:
        super().__init__()
        self.process = process
        self.tool = tool

    @property
    def size(self) -> None:
        return None

    async def _iter_chunks(self) -> AsyncIterator[bytes]:
        stdout = self.process.stdout
        assert stdout is not None
        while True:
            chunk = await stdout.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
        returncode = await self.process.wait()
        if returncode != 0:
            raise ExternalToolFailure(self.tool, returncode)

    async def _release(self) -> None:
        await terminate_process(self.process)


async def terminate_process(process: asyncio.subprocess.Process) -> None:
    """Kill a process if it is still running and reap it."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
        logger.debug("Killed encoder process %s", process.pid)
    await process.wait()
