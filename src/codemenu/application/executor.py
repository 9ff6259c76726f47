"""
BackgroundExecutor - Runs menu work as cooperative asyncio tasks.

Filtering and per-candidate resolution never run on OS threads. They are
scheduled on the running event loop and hand control back between chunks of
work so that keystrokes stay responsive.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from codemenu.logger import get_logger

logger = get_logger("background_executor")

T = TypeVar("T")


class BackgroundExecutor:
    """
    Spawns detached tasks and provides cooperative yield points.

    Detached tasks are tracked until they finish; failures are logged rather
    than propagated, mirroring a fire-and-forget UI task.
    """

    def __init__(self, chunk_size: int = 256):
        """
        Initialize the BackgroundExecutor.

        Args:
            chunk_size: Number of work items processed between yields
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of detached tasks still running."""
        return len(self._tasks)

    async def yield_now(self) -> None:
        """Give other tasks on the loop a chance to run."""
        await asyncio.sleep(0)

    def spawn(self, coro: Coroutine[Any, Any, T], name: str | None = None) -> asyncio.Task[T]:
        """
        Schedule ``coro`` as a detached task on the running loop.

        Args:
            coro: Coroutine to run
            name: Optional task name used in logs

        Returns:
            The created task. Callers may await it but are not required to.
        """
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug(f"Background task {task.get_name()} cancelled")
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).error(f"Background task {task.get_name()} failed: {error}")

    async def shutdown(self) -> None:
        """Cancel every detached task and wait for them to finish."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info(f"Cancelled {len(tasks)} background task(s)")
