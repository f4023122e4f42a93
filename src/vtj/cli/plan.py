"""Plan command: show rendition decisions without encoding anything."""

from __future__ import annotations

import asyncio
import json
import logging

import click

from vtj.cli.exit_codes import ExitCode, exit_code_for
from vtj.config import EnvReader, JobConfig, load_job_config
from vtj.core.exceptions import VTJError
from vtj.jobs.orchestrator import TranscodeJob, open_job_context
from vtj.policy.types import RenditionDecision, RenditionName

logger = logging.getLogger(__name__)


async def plan_job(config: JobConfig) -> dict[RenditionName, RenditionDecision]:
    async with open_job_context(config, require_encoder=False) as context:
        return await TranscodeJob(config, context).plan()


def format_plan(
    decisions: dict[RenditionName, RenditionDecision], config: JobConfig
) -> str:
    """Format decisions for human-readable output."""
    lines = []
    for name, decision in decisions.items():
        action = "skip" if decision.skip else "generate"
        if config.destination_for(name) is None:
            action += " (no destination, disabled)"
        lines.append(f"{name.value}: {action} - {decision.reason}")
        if not decision.skip:
            lines.append("  ffmpeg " + " ".join(decision.args))
    return "\n".join(lines)


def plan_to_dict(
    decisions: dict[RenditionName, RenditionDecision], config: JobConfig
) -> dict:
    return {
        name.value: {
            "skip": decision.skip,
            "reason": decision.reason,
            "args": list(decision.args),
            "destination": config.destination_for(name),
        }
        for name, decision in decisions.items()
    }


@click.command("plan")
@click.option("--json", "as_json", is_flag=True, help="Output decisions as JSON.")
@click.pass_context
def plan_command(ctx: click.Context, as_json: bool) -> None:
    """Probe the source and print which renditions would be generated.

    Requires ORIGINAL_URL and FILENAME. Nothing is encoded or delivered.
    """
    try:
        config = load_job_config(EnvReader(), require_destinations=False)
        decisions = asyncio.run(plan_job(config))
    except VTJError as e:
        logger.error("Planning failed: %s", e)
        ctx.exit(exit_code_for(e))
    except Exception as e:
        logger.exception("Planning failed unexpectedly: %s", e)
        ctx.exit(ExitCode.GENERAL_ERROR)

    if as_json:
        click.echo(json.dumps(plan_to_dict(decisions, config), indent=2))
    else:
        click.echo(format_plan(decisions, config))
