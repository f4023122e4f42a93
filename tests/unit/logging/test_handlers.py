"""Tests for JSONFormatter and configure_logging."""

import json
import logging
from pathlib import Path

from vtj.config.models import LoggingConfig
from vtj.logging.config import configure_logging
from vtj.logging.context import RenditionContextFilter, rendition_context
from vtj.logging.handlers import JSONFormatter


def test_json_formatter_includes_rendition_and_extra() -> None:
    record = logging.LogRecord(
        "vtj.jobs", logging.WARNING, __file__, 1, "upload %s", ("slow",), None
    )
    record.destination = "https://x"
    with rendition_context("ogp"):
        RenditionContextFilter().filter(record)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["level"] == "WARNING"
    assert entry["message"] == "upload slow"
    assert entry["logger"] == "vtj.jobs"
    assert entry["rendition"] == "ogp"
    assert entry["destination"] == "https://x"
    assert "context" not in entry


def test_json_formatter_promotes_tool_and_keeps_other_extra() -> None:
    logger = logging.getLogger("vtj.executor.ffmpeg")
    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        __file__,
        1,
        "Encoder finished",
        (),
        None,
        extra={"tool": "ffmpeg", "bytes_written": 4096},
    )
    RenditionContextFilter().filter(record)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["tool"] == "ffmpeg"
    assert entry["context"] == {"bytes_written": 4096}
    assert "rendition" not in entry


def test_configure_logging_writes_json_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "job.log"
    configure_logging(LoggingConfig(level="debug", format="json", file=log_file))

    logging.getLogger("vtj.test").debug("hello file")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = log_file.read_text().splitlines()
    assert json.loads(lines[-1])["message"] == "hello file"


def test_configure_logging_quiets_httpx() -> None:
    configure_logging(LoggingConfig(level="debug"))
    assert logging.getLogger("httpx").level == logging.WARNING
