"""Structured logging module.

Provides configurable logging with JSON format support, file rotation and
per-rendition context tags.
"""

from vtj.logging.config import configure_logging
from vtj.logging.context import (
    RenditionContextFilter,
    get_rendition_context,
    rendition_context,
)
from vtj.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "RenditionContextFilter",
    "configure_logging",
    "get_rendition_context",
    "rendition_context",
]
