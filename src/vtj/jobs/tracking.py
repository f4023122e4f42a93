"""Tracking of fire-and-forget background calls.

Components that dispatch a network call without awaiting it (such as
draining an upload response) register it here. The orchestrator drains
the collector once before the process exits so no connection is cut off
mid-flight.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundCalls:
    """Collector of in-flight background tasks with a wait-for-all barrier.

    Appends and the final drain never run concurrently: the drain happens
    only after every rendition is resolved.
    """

    def __init__(self) -> None:
        self._tasks: list[asyncio.Task[Any]] = []

    def track(
        self, coro: Coroutine[Any, Any, Any], name: str | None = None
    ) -> asyncio.Task[Any]:
        """Schedule a coroutine and remember it until wait_all().

        Args:
            coro: Coroutine to run in the background.
            name: Optional task name for logs.

        Returns:
            The scheduled task.
        """
        task = asyncio.create_task(coro, name=name)
        self._tasks.append(task)
        return task

    @property
    def pending(self) -> int:
        """Number of tracked tasks that have not finished yet."""
        return sum(1 for task in self._tasks if not task.done())

    def __len__(self) -> int:
        return len(self._tasks)

    async def wait_all(self) -> int:
        """Wait for every tracked task to finish.

        Failures of background calls are logged, never raised.

        Returns:
            Number of tasks that failed.
        """
        tasks, self._tasks = self._tasks, []
        if not tasks:
            return 0

        logger.debug("Waiting for %d background call(s)", len(tasks))
        results = await asyncio.gather(*tasks, return_exceptions=True)

        failures = 0
        for task, result in zip(tasks, results):
            if isinstance(result, BaseException):
                failures += 1
                logger.warning(
                    "Background call %s failed: %s", task.get_name(), result
                )
        return failures
