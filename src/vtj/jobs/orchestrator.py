"""Transcode job orchestration.

Sequences one job: probe the source, deliver the probe JSON, evaluate each
configured rendition, generate and deliver the ones that are needed, wait
for background network calls and finally report completion.

Ordering guarantees:
- The probe JSON is fully delivered before any rendition is evaluated.
- Within a rendition, encoding completes (or streams) before delivery.
- Renditions are independent; they run sequentially unless concurrency is
  enabled, in which case the first failure cancels the other.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum

import httpx

from vtj.config.models import JobConfig
from vtj.core.exceptions import ReportFailure, VTJError
from vtj.delivery.sink import DeliverySink
from vtj.delivery.target import DeliveryTarget
from vtj.executor.artifacts import InlineArtifact
from vtj.executor.ffmpeg import FFmpegExecutor
from vtj.executor.interface import OutputMode, require_tool
from vtj.introspector.ffprobe import FFprobeIntrospector
from vtj.introspector.interface import MediaProbe
from vtj.introspector.types import MediaMetadata, ProbeResult
from vtj.jobs.summary import JobResult, RenditionOutcome, RenditionStatus
from vtj.jobs.tracking import BackgroundCalls
from vtj.logging.context import rendition_context
from vtj.policy.evaluator import evaluate_rendition
from vtj.policy.renditions import PROBE_CONTENT_TYPE, RENDITIONS
from vtj.policy.types import RenditionDecision, RenditionName, RenditionSpec

logger = logging.getLogger(__name__)


class JobState(Enum):
    """Lifecycle states of a job."""

    START = "start"
    PROBING = "probing"
    PROBE_DELIVERED = "probe_delivered"
    EVALUATING = "evaluating"
    GENERATING = "generating"
    AWAITING_BACKGROUND = "awaiting_background"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class JobContext:
    """Collaborators of a job, passed explicitly instead of module globals."""

    probe: MediaProbe
    executor: FFmpegExecutor | None
    sink: DeliverySink
    client: httpx.AsyncClient
    background: BackgroundCalls


@asynccontextmanager
async def open_job_context(
    config: JobConfig, require_encoder: bool = True
) -> AsyncIterator[JobContext]:
    """Create the collaborators for a job and release them afterwards.

    Dry runs pass require_encoder=False so a host with only ffprobe can
    still plan; the context then has no executor.

    Background calls are drained before the HTTP client closes, on both the
    success and the failure path.

    Raises:
        ToolNotAvailableError: If ffmpeg or ffprobe cannot be found.
    """
    ffprobe_path = require_tool("ffprobe", config.tools.ffprobe)
    executor: FFmpegExecutor | None = None
    if require_encoder:
        ffmpeg_path = require_tool("ffmpeg", config.tools.ffmpeg)
        executor = FFmpegExecutor(ffmpeg_path, temp_dir=config.temp_dir)
    background = BackgroundCalls()

    timeout = httpx.Timeout(
        config.http_timeout_seconds, connect=config.connect_timeout_seconds
    )
    async with httpx.AsyncClient(timeout=timeout) as client:
        try:
            yield JobContext(
                probe=FFprobeIntrospector(ffprobe_path),
                executor=executor,
                sink=DeliverySink(client, background),
                client=client,
                background=background,
            )
        finally:
            await background.wait_all()


class TranscodeJob:
    """One-shot transcode job."""

    def __init__(
        self,
        config: JobConfig,
        context: JobContext,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._context = context
        self._clock = clock
        self._state = JobState.START
        self.result = JobResult()

    @property
    def state(self) -> JobState:
        return self._state

    def _set_state(self, state: JobState) -> None:
        logger.debug("Job state %s -> %s", self._state.value, state.value)
        self._state = state

    async def run(self) -> JobResult:
        """Run the whole job.

        Returns:
            JobResult with per-rendition outcomes and timings.

        Raises:
            ExternalToolFailure, ParseFailure, TransportFailure: Fatal
                failures of the probe, the probe delivery or any rendition.
                The remaining pipeline is abandoned.
        """
        start = self._clock()
        logger.info("Starting video transcoding job for %s", self._config.source_url)
        try:
            probe = await self._probe()
            await self._deliver_probe(probe)

            decisions = self.evaluate(probe.metadata)
            self._set_state(JobState.GENERATING)
            await self._process_renditions(decisions)

            self._set_state(JobState.AWAITING_BACKGROUND)
            await self._context.background.wait_all()

            self._set_state(JobState.REPORTING)
            logger.info("All uploads completed, reporting completion")
            await self._report()
            self._set_state(JobState.DONE)
        except BaseException:
            self._set_state(JobState.FAILED)
            raise
        finally:
            self.result.wall_seconds = self._clock() - start

        logger.info("All done!\n%s", self.result.format_summary())
        return self.result

    async def plan(self) -> dict[RenditionName, RenditionDecision]:
        """Probe the source and evaluate renditions without encoding.

        Returns:
            Decision for every rendition, configured or not.
        """
        probe = await self._probe()
        return self.evaluate(probe.metadata, include_disabled=True)

    async def _probe(self) -> ProbeResult:
        self._set_state(JobState.PROBING)
        logger.info("Probing video information with ffprobe")
        probe = await self._context.probe.probe(self._config.source_url)
        self.result.media_duration_seconds = probe.metadata.duration_seconds
        return probe

    async def _deliver_probe(self, probe: ProbeResult) -> None:
        logger.info("Uploading ffprobe result")
        artifact = InlineArtifact.from_text(probe.raw_text)
        target = DeliveryTarget.for_artifact(
            self._config.probe_destination, artifact, PROBE_CONTENT_TYPE
        )
        await self._context.sink.deliver(target, artifact)
        self.result.probe_delivered = True
        self._set_state(JobState.PROBE_DELIVERED)

    def evaluate(
        self, metadata: MediaMetadata, include_disabled: bool = False
    ) -> dict[RenditionName, RenditionDecision]:
        """Evaluate every rendition that has a destination.

        Renditions without a destination are recorded as disabled, unless
        include_disabled is set (dry-run planning).
        """
        self._set_state(JobState.EVALUATING)
        decisions: dict[RenditionName, RenditionDecision] = {}
        for name, spec in RENDITIONS.items():
            if self._config.destination_for(name) is None and not include_disabled:
                self.result.record(
                    RenditionOutcome(name, RenditionStatus.DISABLED, "no destination")
                )
                continue
            decisions[name] = evaluate_rendition(
                spec,
                metadata,
                filename=self._config.filename,
                source_url=self._config.source_url,
                fragmented=self._config.output_mode == OutputMode.STREAM,
            )
        return decisions

    async def _process_renditions(
        self, decisions: dict[RenditionName, RenditionDecision]
    ) -> None:
        pending: list[tuple[RenditionSpec, RenditionDecision, str]] = []
        for name, decision in decisions.items():
            if decision.skip:
                logger.info(
                    "Skipping %s video generation: %s", name.value, decision.reason
                )
                self.result.record(
                    RenditionOutcome(name, RenditionStatus.SKIPPED, decision.reason)
                )
                continue
            destination = self._config.destination_for(name)
            assert destination is not None
            pending.append((RENDITIONS[name], decision, destination))

        if self._config.concurrent_renditions and len(pending) > 1:
            await self._run_concurrently(pending)
        else:
            for spec, decision, destination in pending:
                await self._generate(spec, decision, destination)

    async def _run_concurrently(
        self, pending: list[tuple[RenditionSpec, RenditionDecision, str]]
    ) -> None:
        tasks = [
            asyncio.create_task(self._generate(*item), name=item[0].name.value)
            for item in pending
        ]
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            # Let cancelled siblings dispose of their artifacts
            await asyncio.gather(*tasks, return_exceptions=True)

        for task in done:
            error = task.exception()
            if error is not None:
                raise error

    async def _generate(
        self, spec: RenditionSpec, decision: RenditionDecision, destination: str
    ) -> None:
        name = spec.name
        executor = self._context.executor
        if executor is None:
            raise RuntimeError("Job context was opened without an encoder")
        with rendition_context(name.value):
            logger.info("Generating %s video: %s", name.value, decision.reason)
            start = self._clock()
            try:
                async with executor.execute(
                    decision.args, self._config.output_mode
                ) as artifact:
                    target = DeliveryTarget.for_artifact(
                        destination, artifact, spec.content_type
                    )
                    receipt = await self._context.sink.deliver(target, artifact)
            except VTJError as e:
                self.result.record(
                    RenditionOutcome(name, RenditionStatus.FAILED, str(e))
                )
                raise

            self.result.record(
                RenditionOutcome(
                    name,
                    RenditionStatus.GENERATED,
                    decision.reason,
                    bytes_delivered=receipt.bytes_written,
                    elapsed_seconds=self._clock() - start,
                )
            )

    async def _report(self) -> None:
        url = self._config.report_url
        if url is None:
            logger.debug("No report URL configured")
            return
        try:
            await self._send_report(url)
        except ReportFailure as e:
            logger.warning("Completion report failed: %s", e)

    async def _send_report(self, url: str) -> None:
        try:
            response = await self._context.client.get(
                url, timeout=self._config.report_timeout_seconds
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ReportFailure(f"GET {url}: {str(e) or type(e).__name__}") from e
        if not response.is_success:
            raise ReportFailure(
                f"GET {url}: {response.status_code} {response.reason_phrase}"
            )
