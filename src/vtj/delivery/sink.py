"""Destination-agnostic delivery entry point."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import httpx

from vtj.core.formatting import format_file_size
from vtj.delivery.local import LocalSink
from vtj.delivery.remote import RemoteSink
from vtj.delivery.target import DeliveryTarget
from vtj.executor.artifacts import TranscodeArtifact
from vtj.jobs.tracking import BackgroundCalls

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryReceipt:
    """Result of a completed delivery."""

    destination: str
    bytes_written: int
    elapsed_seconds: float


class DeliverySink:
    """Delivers an artifact to a remote URL or a local path.

    Both cases complete only when the bytes are fully flushed, or raise
    TransportFailure. The artifact is disposed once delivery finishes or
    fails.
    """

    def __init__(self, client: httpx.AsyncClient, background: BackgroundCalls) -> None:
        self._remote = RemoteSink(client, background)
        self._local = LocalSink()

    async def deliver(
        self, target: DeliveryTarget, artifact: TranscodeArtifact
    ) -> DeliveryReceipt:
        """Deliver an artifact and release it.

        Args:
            target: Destination and headers.
            artifact: Artifact to deliver; ownership passes to the sink.

        Returns:
            DeliveryReceipt with bytes written and elapsed time.

        Raises:
            TransportFailure: If the delivery fails.
            ExternalToolFailure: If a live-stream encoder fails mid-delivery.
        """
        logger.info(
            "Delivering %s (%s) to %s",
            artifact.kind,
            format_file_size(artifact.size),
            target.destination,
            extra={"destination": target.destination, "artifact": artifact.kind},
        )
        start = time.monotonic()
        try:
            if target.is_remote:
                written = await self._remote.deliver(target, artifact)
            else:
                written = await self._local.deliver(target, artifact)
        finally:
            await artifact.dispose()

        elapsed = time.monotonic() - start
        logger.info(
            "Delivered %s to %s in %.2fs",
            format_file_size(written),
            target.destination,
            elapsed,
            extra={"destination": target.destination, "bytes_written": written},
        )
        return DeliveryReceipt(target.destination, written, elapsed)
