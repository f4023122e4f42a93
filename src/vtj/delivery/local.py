"""Local filesystem delivery."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from vtj.core.exceptions import TransportFailure
from vtj.delivery.target import DeliveryTarget
from vtj.executor.artifacts import TranscodeArtifact

logger = logging.getLogger(__name__)


class LocalSink:
    """Writes artifacts to a local path.

    File operations run in worker threads so a slow disk does not stall a
    concurrent upload or the encoder pipe.
    """

    async def deliver(self, target: DeliveryTarget, artifact: TranscodeArtifact) -> int:
        """Write the artifact to target.destination.

        Args:
            target: Local destination.
            artifact: Artifact to write.

        Returns:
            Number of bytes written.

        Raises:
            TransportFailure: On any write error.
        """
        path = Path(target.destination).expanduser()
        written = 0
        try:
            await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
            f = await asyncio.to_thread(open, path, "wb")
            try:
                async for chunk in artifact.chunks():
                    await asyncio.to_thread(f.write, chunk)
                    written += len(chunk)
            finally:
                await asyncio.to_thread(f.close)
        except OSError as e:
            raise TransportFailure(target.destination, str(e)) from e

        if target.content_length is not None and written != target.content_length:
            raise TransportFailure(
                target.destination,
                f"wrote {written} bytes, expected {target.content_length}",
            )
        return written
