"""Tests for HTTP PUT delivery."""

import asyncio

import httpx
import pytest

from vtj.core.exceptions import TransportFailure
from vtj.delivery.remote import RemoteSink
from vtj.delivery.target import DeliveryTarget
from vtj.executor.artifacts import InlineArtifact, TranscodeArtifact
from vtj.jobs.tracking import BackgroundCalls

URL = "https://storage.example.com/upload/main.mp4"


class UnsizedArtifact(TranscodeArtifact):
    """Artifact of unknown length, like a live encoder pipe."""

    kind = "test-stream"

    def __init__(self, parts: list[bytes]) -> None:
        super().__init__()
        self.parts = parts

    @property
    def size(self) -> None:
        return None

    async def _iter_chunks(self):
        for part in self.parts:
            yield part


class Recorder:
    """MockTransport handler recording requests."""

    def __init__(self, status_code: int = 200, body: bytes = b"ok") -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)


@pytest.mark.asyncio
class TestRemoteSink:
    """Tests for RemoteSink.deliver."""

    async def test_sized_upload_sets_content_length(self) -> None:
        recorder = Recorder()
        background = BackgroundCalls()
        artifact = InlineArtifact(b"0123456789")
        target = DeliveryTarget.for_artifact(URL, artifact, "video/mp4")

        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            sent = await RemoteSink(client, background).deliver(target, artifact)
            assert await background.wait_all() == 0

        (request,) = recorder.requests
        assert sent == 10
        assert request.method == "PUT"
        assert request.headers["Content-Length"] == "10"
        assert request.headers["Content-Type"] == "video/mp4"
        assert "Transfer-Encoding" not in request.headers
        assert request.content == b"0123456789"

    async def test_unsized_upload_is_chunked(self) -> None:
        recorder = Recorder()
        artifact = UnsizedArtifact([b"abc", b"def"])
        target = DeliveryTarget.for_artifact(URL, artifact, "video/mp4")

        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            background = BackgroundCalls()
            sent = await RemoteSink(client, background).deliver(target, artifact)
            await background.wait_all()

        (request,) = recorder.requests
        assert sent == 6
        assert request.headers["Transfer-Encoding"] == "chunked"
        assert "Content-Length" not in request.headers
        assert request.content == b"abcdef"

    async def test_success_response_is_drained_in_background(self) -> None:
        recorder = Recorder(body=b"x" * 10_000)
        background = BackgroundCalls()

        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            artifact = InlineArtifact(b"data")
            await RemoteSink(client, background).deliver(
                DeliveryTarget.for_artifact(URL, artifact), artifact
            )
            assert len(background) == 1
            assert await background.wait_all() == 0

        assert len(background) == 0

    async def test_non_2xx_raises_transport_failure(self) -> None:
        recorder = Recorder(status_code=500, body=b"internal error")
        background = BackgroundCalls()

        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            artifact = InlineArtifact(b"data")
            with pytest.raises(TransportFailure) as exc_info:
                await RemoteSink(client, background).deliver(
                    DeliveryTarget.for_artifact(URL, artifact), artifact
                )

        assert exc_info.value.status_code == 500
        assert exc_info.value.destination == URL
        # Failed responses are drained inline, not in the background
        assert len(background) == 0

    async def test_network_error_raises_transport_failure(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            artifact = InlineArtifact(b"data")
            with pytest.raises(TransportFailure, match="connection refused") as exc_info:
                await RemoteSink(client, BackgroundCalls()).deliver(
                    DeliveryTarget.for_artifact(URL, artifact), artifact
                )

        assert exc_info.value.status_code is None

    async def test_stalled_destination_times_out(self, silent_peer) -> None:
        timeout = httpx.Timeout(0.5)
        artifact = InlineArtifact(b"data")
        async with silent_peer() as base_url:
            target = DeliveryTarget.for_artifact(f"{base_url}/main.mp4", artifact)
            async with httpx.AsyncClient(timeout=timeout, trust_env=False) as client:
                sink = RemoteSink(client, BackgroundCalls())
                with pytest.raises(TransportFailure) as exc_info:
                    await asyncio.wait_for(sink.deliver(target, artifact), timeout=10)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)

    async def test_malformed_url_raises_transport_failure(self) -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(Recorder())) as client:
            artifact = InlineArtifact(b"data")
            with pytest.raises(TransportFailure):
                await RemoteSink(client, BackgroundCalls()).deliver(
                    DeliveryTarget.for_artifact(
                        "https://storage.example.com/ma\x07in.mp4", artifact
                    ),
                    artifact,
                )
