"""Job orchestration: background-call tracking, results and the job itself.

The orchestrator lives in vtj.jobs.orchestrator and is imported from there
directly; delivery modules depend on the tracking collector exported here.
"""

from vtj.jobs.summary import JobResult, RenditionOutcome, RenditionStatus
from vtj.jobs.tracking import BackgroundCalls

__all__ = [
    "BackgroundCalls",
    "JobResult",
    "RenditionOutcome",
    "RenditionStatus",
]
