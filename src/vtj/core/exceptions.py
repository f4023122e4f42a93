"""Exception hierarchy for the transcode job.

Every failure the job can raise derives from VTJError so the CLI can map
each class to an exit code with a single except clause per category.
"""

from __future__ import annotations


class VTJError(Exception):
    """Base exception for all job errors."""


class ConfigError(VTJError):
    """Raised when the job configuration is missing or invalid.

    Attributes:
        problems: Every individual problem found while loading.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("Invalid configuration: " + "; ".join(self.problems))


class ToolNotAvailableError(VTJError):
    """Raised when ffmpeg or ffprobe cannot be located."""


class ExternalToolFailure(VTJError):
    """Raised when the probe or encode process exits non-zero.

    Attributes:
        tool: Name of the external tool (e.g. "ffmpeg").
        exit_code: Process exit code.
    """

    def __init__(self, tool: str, exit_code: int) -> None:
        self.tool = tool
        self.exit_code = exit_code
        super().__init__(f"{tool} exited with code {exit_code}")


class ParseFailure(VTJError):
    """Raised when probe output cannot be parsed."""


class TransportFailure(VTJError):
    """Raised when delivering bytes to a destination fails.

    Covers non-2xx upload responses, network errors and local write errors.

    Attributes:
        destination: Destination URL or path.
        status_code: HTTP status code, or None for network/local errors.
    """

    def __init__(
        self,
        destination: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.destination = destination
        self.status_code = status_code
        super().__init__(f"Failed to deliver to {destination}: {message}")


class ReportFailure(VTJError):
    """Raised when the completion report call fails.

    Never fatal; the orchestrator logs and swallows it.
    """
