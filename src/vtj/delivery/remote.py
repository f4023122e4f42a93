"""HTTP PUT delivery using httpx.

Request bodies are streamed from the artifact. A known length is sent as
Content-Length; an unknown length falls back to chunked transfer encoding.
Response bodies are always drained and discarded so the connection is
released cleanly.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx

from vtj.core.exceptions import TransportFailure
from vtj.delivery.target import DeliveryTarget
from vtj.executor.artifacts import TranscodeArtifact
from vtj.jobs.tracking import BackgroundCalls

logger = logging.getLogger(__name__)


async def drain_response(response: httpx.Response) -> None:
    """Read and discard a streamed response body, then close it."""
    try:
        await response.aread()
    finally:
        await response.aclose()


class ByteCounter:
    """Counts bytes passing through an async byte iterator."""

    def __init__(self) -> None:
        self.total = 0

    async def wrap(self, chunks: AsyncIterator[bytes]) -> AsyncIterator[bytes]:
        async for chunk in chunks:
            self.total += len(chunk)
            yield chunk


class RemoteSink:
    """Uploads artifacts with a streaming HTTP PUT."""

    def __init__(self, client: httpx.AsyncClient, background: BackgroundCalls) -> None:
        """Initialize the sink.

        Args:
            client: Shared HTTP client.
            background: Collector for the fire-and-forget response drain.
        """
        self._client = client
        self._background = background

    def _headers(self, target: DeliveryTarget) -> dict[str, str]:
        headers: dict[str, str] = {}
        if target.content_type:
            headers["Content-Type"] = target.content_type
        if target.content_length is not None:
            headers["Content-Length"] = str(target.content_length)
        return headers

    async def deliver(self, target: DeliveryTarget, artifact: TranscodeArtifact) -> int:
        """Upload the artifact to target.destination.

        Args:
            target: Remote destination and headers.
            artifact: Artifact to upload.

        Returns:
            Number of body bytes sent.

        Raises:
            TransportFailure: On a network error or a non-2xx response.
        """
        counter = ByteCounter()
        try:
            request = self._client.build_request(
                "PUT",
                target.destination,
                content=counter.wrap(artifact.chunks()),
                headers=self._headers(target),
            )
            response = await self._client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = str(e) or type(e).__name__
            raise TransportFailure(target.destination, message) from e

        if not response.is_success:
            try:
                await drain_response(response)
            except httpx.HTTPError as e:
                logger.debug("Error draining failed response: %s", e)
            raise TransportFailure(
                target.destination,
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        self._background.track(
            drain_response(response), name=f"drain {target.destination}"
        )
        return counter.total
