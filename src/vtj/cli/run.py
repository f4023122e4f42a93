"""Run command: execute the full transcode job."""

from __future__ import annotations

import asyncio
import logging

import click

from vtj.cli.exit_codes import ExitCode, exit_code_for
from vtj.config import EnvReader, JobConfig, load_job_config
from vtj.core.exceptions import VTJError
from vtj.jobs.orchestrator import TranscodeJob, open_job_context
from vtj.jobs.summary import JobResult

logger = logging.getLogger(__name__)


async def run_job(config: JobConfig) -> JobResult:
    """Run one job with freshly created collaborators."""
    async with open_job_context(config) as context:
        job = TranscodeJob(config, context)
        return await job.run()


@click.command("run")
@click.pass_context
def run_command(ctx: click.Context) -> None:
    """Probe, transcode and deliver the configured source.

    All inputs come from the environment: ORIGINAL_URL, FILENAME,
    PROBE_DEST_URL, OGP_DEST_URL, MAIN_DEST_URL and REPORT_URL.
    """
    reader = EnvReader()
    try:
        config = load_job_config(reader)
        asyncio.run(run_job(config))
    except KeyboardInterrupt:
        logger.error("Interrupted")
        ctx.exit(ExitCode.INTERRUPTED)
    except VTJError as e:
        logger.error("Job failed: %s", e)
        ctx.exit(exit_code_for(e))
    except Exception as e:
        logger.exception("Job failed unexpectedly: %s", e)
        ctx.exit(ExitCode.GENERAL_ERROR)
