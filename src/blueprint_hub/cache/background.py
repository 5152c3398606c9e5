"""Best-effort side channel for cache analytics writes.

Counter updates must never block or fail the request that triggered them.
``dispatch`` schedules a coroutine on the running loop and returns at once;
the only thing that ever happens to its failure is a log line.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BestEffortDispatcher:
    """Fire-and-forget task runner whose failures are logged, never raised."""

    def __init__(self) -> None:
        # Strong references so pending tasks are not garbage-collected mid-flight
        self._tasks: set[asyncio.Task] = set()

    def dispatch(self, coro: Coroutine[Any, Any, Any], description: str) -> None:
        """Schedule ``coro`` without awaiting it. Returns None on purpose."""
        try:
            task = asyncio.get_running_loop().create_task(self._run(coro, description))
        except RuntimeError:
            # No running loop (sync caller): nothing can run it, so drop it
            coro.close()
            logger.warning("Dropped best-effort task outside event loop: %s", description)
            return
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, coro: Coroutine[Any, Any, Any], description: str) -> None:
        try:
            await coro
        except Exception:
            logger.warning("Best-effort task failed: %s", description, exc_info=True)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight task. Used on shutdown and in tests."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
