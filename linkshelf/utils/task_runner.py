"""A utility module to facilitate running & managing asyncio Tasks."""

import asyncio
import logging
from asyncio import ALL_COMPLETED, Task, wait
from typing import Any, Callable, Coroutine, Optional

import aiodogstatsd

logger = logging.getLogger(__name__)

# Type for timeout callback
TimeoutCallback = Callable[[list[Task]], None]


async def gather(
    tasks: list[Task],
    *,
    timeout: Optional[float] = None,
    timeout_cb: Optional[TimeoutCallback] = None,
) -> tuple[list[Task], list[Task]]:
    """Run a list of tasks to their completion, gather all the completed tasks whenever
    they finish. If a timeout is specified, all the pending tasks will be cancelled
    if the timeout occurs prior to their completion.

    Args:
    - tasks: A list of Tasks.
    - timeout: A float indicating timeout (in seconds) for the entire task execution.
      If not specified, no timeout will be set.
    - timeout_cb: A callable that gets called when timeout occurs. This callback will
      be executed before the cancellation of the timeout tasks.

    Returns: a tuple of two lists: the completed tasks and the timed out tasks.

    Note that:
    - The order of the returned tasks might not be the same as the input tasks.
    - The completed tasks may contain tasks that have encountered exceptions. The caller
      can either `await` those tasks with exception handling or call `result()` or
      `exception()` on the those tasks to fetch the results (or exceptions).
    """
    if len(tasks) == 0:
        return [], []

    done, pending = await wait(tasks, timeout=timeout, return_when=ALL_COMPLETED)
    if pending:
        logger.warning("Timeout triggered in the task runner")
        if timeout_cb:
            timeout_cb(list(pending))
        for task in pending:
            logger.warning(f"Cancelling the task: {task.get_name()} due to timeout")
            task.cancel()

    return list(done), list(pending)


def metrics_timeout_handler(client: aiodogstatsd.Client, tasks: list[Task]) -> None:
    """Timeout handler to record metrics for background tasks cancelled at shutdown"""
    client.increment("background.task.cancelled", value=len(tasks))


class BackgroundTaskRunner:
    """Own fire-and-forget tasks that must outlive the request that started them.

    The event loop only keeps weak references to tasks, so every spawned task is held
    here until it finishes. Failures are logged and discarded, never re-raised.
    """

    _tasks: set[Task]

    def __init__(self) -> None:
        self._tasks = set()

    @property
    def pending(self) -> int:
        """Return the number of tasks that have not finished yet."""
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> Task:
        """Schedule `coro` on the running loop without awaiting it."""
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.info(f"Background task {task.get_name()} was cancelled")
            return
        if (exc := task.exception()) is not None:
            logger.error(
                f"Background task {task.get_name()} failed: {exc}",
                exc_info=exc,
            )

    async def shutdown(
        self, timeout: float, timeout_cb: Optional[TimeoutCallback] = None
    ) -> None:
        """Wait up to `timeout` seconds for in-flight tasks, then cancel the rest."""
        _, cancelled = await gather(list(self._tasks), timeout=timeout, timeout_cb=timeout_cb)
        if cancelled:
            # Let the cancellations propagate before the loop goes away.
            await wait(cancelled)
