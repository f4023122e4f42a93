"""Delivery target description."""

from __future__ import annotations

from dataclasses import dataclass

from vtj.executor.artifacts import TranscodeArtifact

REMOTE_SCHEMES = ("http://", "https://")


def is_remote_destination(destination: str) -> bool:
    """True if the destination is an HTTP(S) URL rather than a local path."""
    return destination.startswith(REMOTE_SCHEMES)


@dataclass(frozen=True)
class DeliveryTarget:
    """Where and how to deliver one artifact."""

    destination: str
    """Remote URL (PUT upload) or local filesystem path."""

    content_type: str | None = None
    content_length: int | None = None
    """Exact body length; None streams the body with chunked encoding."""

    @property
    def is_remote(self) -> bool:
        return is_remote_destination(self.destination)

    @classmethod
    def for_artifact(
        cls,
        destination: str,
        artifact: TranscodeArtifact,
        content_type: str | None = None,
    ) -> DeliveryTarget:
        """Build a target whose length matches the artifact's known size."""
        return cls(
            destination=destination,
            content_type=content_type,
            content_length=artifact.size,
        )
