"""Job result aggregation and summary text.

JobResult is only used for the final human-readable report; nothing is
persisted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from vtj.core.formatting import format_file_size, format_percent, format_seconds
from vtj.policy.types import RenditionName


class RenditionStatus(Enum):
    """Final state of one rendition."""

    GENERATED = "generated"
    SKIPPED = "skipped"  # Source already compliant
    DISABLED = "disabled"  # No destination configured
    FAILED = "failed"


@dataclass
class RenditionOutcome:
    """What happened to one rendition."""

    name: RenditionName
    status: RenditionStatus
    reason: str = ""
    bytes_delivered: int | None = None
    elapsed_seconds: float | None = None


@dataclass
class JobResult:
    """Aggregated job outcome."""

    outcomes: dict[RenditionName, RenditionOutcome] = field(default_factory=dict)
    wall_seconds: float = 0.0
    media_duration_seconds: float = math.nan
    probe_delivered: bool = False

    @property
    def success(self) -> bool:
        return self.probe_delivered and not any(
            o.status == RenditionStatus.FAILED for o in self.outcomes.values()
        )

    @property
    def speed_ratio(self) -> float:
        """Wall-clock time divided by media duration (NaN if unknown)."""
        duration = self.media_duration_seconds
        if math.isnan(duration) or duration <= 0:
            return math.nan
        return self.wall_seconds / duration

    def record(self, outcome: RenditionOutcome) -> None:
        self.outcomes[outcome.name] = outcome

    def format_summary(self) -> str:
        """Generate a human-readable multi-line summary.

        Returns:
            Summary text, one line per rendition plus a totals line.
        """
        lines = []
        for outcome in self.outcomes.values():
            line = f"{outcome.name.value}: {outcome.status.value}"
            if outcome.bytes_delivered is not None:
                line += f", {format_file_size(outcome.bytes_delivered)}"
            if outcome.elapsed_seconds is not None:
                line += f" in {format_seconds(outcome.elapsed_seconds)}"
            if outcome.reason:
                line += f" ({outcome.reason})"
            lines.append(line)

        lines.append(
            f"Total job duration: {format_seconds(self.wall_seconds)} "
            f"({format_percent(self.speed_ratio)} speed)."
        )
        return "\n".join(lines)
