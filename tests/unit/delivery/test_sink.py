"""Tests for the destination-agnostic DeliverySink."""

from pathlib import Path

import httpx
import pytest

from vtj.core.exceptions import TransportFailure
from vtj.delivery.sink import DeliverySink
from vtj.delivery.target import DeliveryTarget
from vtj.executor.artifacts import SizedFileArtifact
from vtj.jobs.tracking import BackgroundCalls


def make_file_artifact(tmp_path: Path, data: bytes) -> SizedFileArtifact:
    path = tmp_path / "encoded.tmp"
    path.write_bytes(data)
    return SizedFileArtifact(path, len(data))


@pytest.mark.asyncio
class TestDeliverySink:
    """The sink dispatches on the destination and always disposes."""

    async def test_local_destination(self, tmp_path: Path) -> None:
        artifact = make_file_artifact(tmp_path, b"video-bytes")
        dest = tmp_path / "out.mp4"

        async with httpx.AsyncClient() as client:
            receipt = await DeliverySink(client, BackgroundCalls()).deliver(
                DeliveryTarget.for_artifact(str(dest), artifact), artifact
            )

        assert receipt.bytes_written == 11
        assert receipt.destination == str(dest)
        assert dest.read_bytes() == b"video-bytes"
        assert not artifact.path.exists()

    async def test_remote_destination(self, tmp_path: Path) -> None:
        received: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(request.content)
            return httpx.Response(201)

        artifact = make_file_artifact(tmp_path, b"video-bytes")
        background = BackgroundCalls()
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            receipt = await DeliverySink(client, background).deliver(
                DeliveryTarget.for_artifact("https://up.example.com/x", artifact),
                artifact,
            )
            await background.wait_all()

        assert received == [b"video-bytes"]
        assert receipt.bytes_written == 11
        assert not artifact.path.exists()

    async def test_failed_delivery_still_disposes(self, tmp_path: Path) -> None:
        artifact = make_file_artifact(tmp_path, b"video-bytes")
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(TransportFailure):
                await DeliverySink(client, BackgroundCalls()).deliver(
                    DeliveryTarget.for_artifact("https://up.example.com/x", artifact),
                    artifact,
                )

        assert artifact.disposed
        assert not artifact.path.exists()
