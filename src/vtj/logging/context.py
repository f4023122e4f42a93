"""Rendition context for structured logging.

When OGP and main renditions run concurrently their log lines interleave;
the current rendition is carried in a contextvar (one value per asyncio
task) and injected into every record.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_rendition: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "rendition", default=None
)


def get_rendition_context() -> str | None:
    """Return the rendition being processed in this task, if any."""
    return _rendition.get()


@contextmanager
def rendition_context(name: str) -> Generator[None, None, None]:
    """Mark log records emitted inside the block with a rendition name.

    Example:
        with rendition_context("ogp"):
            logger.info("Generating")  # "[ogp] Generating"
    """
    token = _rendition.set(name)
    try:
        yield
    finally:
        _rendition.reset(token)


class RenditionContextFilter(logging.Filter):
    """Logging filter that injects the rendition name into log records.

    Adds ``rendition`` for JSON output and ``rendition_tag`` ("[ogp] " or
    empty) for text output. Never filters records out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = get_rendition_context()
        record.rendition = name
        record.rendition_tag = f"[{name}] " if name else ""
        return True
