"""CLI module for the transcode job."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import click

from vtj import __version__
from vtj.cli.plan import plan_command
from vtj.cli.run import run_command
from vtj.config import EnvReader, load_logging_config
from vtj.logging import configure_logging

logger = logging.getLogger(__name__)


def _configure_logging(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the environment with CLI overrides.

    Args:
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    config = load_logging_config(EnvReader())
    overrides: dict[str, object] = {}
    if log_level is not None:
        overrides["level"] = log_level
    if log_file is not None:
        overrides["file"] = log_file
    if log_json:
        overrides["format"] = "json"
    configure_logging(dataclasses.replace(config, **overrides))


@click.group()
@click.version_option(__version__, prog_name="vtj")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override VTJ_LOG_LEVEL.",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Also write logs to this file.",
)
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines.")
def main(log_level: str | None, log_file: Path | None, log_json: bool) -> None:
    """Video transcode job: probe a source, build renditions, deliver them."""
    _configure_logging(log_level, log_file, log_json)


main.add_command(run_command)
main.add_command(plan_command)
