"""Formatting utilities.

Pure functions for presenting sizes, durations and ratios in log lines and
the final job summary.
"""

import math


def format_file_size(size_bytes: int | None) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes, or None if unknown.

    Returns:
        Formatted string (e.g., "4.2 GB", "128 MB", "1.5 KB").
    """
    if size_bytes is None:
        return "unknown size"
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes} B"


def format_seconds(seconds: float) -> str:
    """Format a duration in seconds with two decimals, or "n/a" for NaN."""
    if math.isnan(seconds):
        return "n/a"
    return f"{seconds:.2f} seconds"


def format_percent(ratio: float) -> str:
    """Format a ratio as a percentage, or "n/a" when not finite."""
    if not math.isfinite(ratio):
        return "n/a"
    return f"{ratio * 100:.2f}%"
