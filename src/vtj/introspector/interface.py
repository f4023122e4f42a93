"""MediaProbe interface for source metadata extraction."""

from typing import Protocol

from vtj.introspector.types import ProbeResult


class MediaProbe(Protocol):
    """Protocol for media probe implementations.

    Implementations inspect a source reachable by URL and return both the
    raw tool output (delivered verbatim as the probe artifact) and its
    parsed summary.
    """

    async def probe(self, source_url: str) -> ProbeResult:
        """Inspect a source.

        Args:
            source_url: URL or path of the source media.

        Returns:
            ProbeResult with raw output and parsed metadata.

        Raises:
            ExternalToolFailure: If the probe tool exits non-zero.
            ParseFailure: If the output cannot be parsed.
        """
        ...
