"""Job manager coordinating the queue, the worker and admission handoffs.

This module provides the JobManager class which owns the bounded queue and
the single worker, and turns admitted jobs into detached handoff tasks so
the admission path never waits for queue space.
"""

import asyncio
import typing as t

from ..domain.exceptions import ManagerNotInitializedError
from ..domain.jobs import Job
from ..events import EventEmitter
from ..infrastructure.logging import get_logger
from .queue import DEFAULT_CAPACITY, JobQueue
from .runner import BaseRunner
from .tracker import JobTracker
from .worker import JobWorker

if t.TYPE_CHECKING:
    import loguru


class JobManager:
    """Owns the job queue and worker lifecycle.

    Key responsibilities:
    - Starting and stopping the single worker
    - Fire-and-forget handoff of admitted jobs into the bounded queue
    - Keeping handoff tasks referenced until they finish
    - Tracking job outcomes from lifecycle events for the shutdown summary

    Saturation behavior: when the queue is full, handoff tasks wait for a
    free slot. They are never dropped while the process lives; jobs still
    waiting at shutdown are abandoned and counted in the log, since job
    state is not persisted.

    Usage:
        async with JobManager(capacity=10) as manager:
            manager.submit(job)
            await manager.wait_until_idle()
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        runner: BaseRunner | None = None,
        queue: JobQueue | None = None,
        worker: JobWorker | None = None,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        """Initialise the job manager.

        Args:
            capacity: Queue capacity. Ignored when ``queue`` is given.
            runner: Command runner for the default worker.
            queue: Job queue. If None, one will be created.
            worker: Worker consuming ``queue``. If None, one will be created.
            logger: Logger instance for recording manager events.
        """
        self._logger = logger
        self.emitter = EventEmitter(logger)
        self.queue = queue or JobQueue(
            capacity=capacity, logger=logger, emitter=self.emitter
        )
        self.worker = worker or JobWorker(
            queue=self.queue, runner=runner, logger=logger, emitter=self.emitter
        )
        self.tracker = JobTracker(logger)
        self.tracker.attach(self.emitter)
        self._handoffs: set[asyncio.Task[None]] = set()
        self._is_open = False

    @property
    def is_active(self) -> bool:
        """True between open() and close()."""
        return self._is_open

    @property
    def pending_handoffs(self) -> int:
        """Admitted jobs not yet placed in the queue."""
        return len(self._handoffs)

    async def __aenter__(self) -> "JobManager":
        await self.open()
        return self

    async def __aexit__(self, *args: t.Any) -> None:
        await self.close()

    async def open(self) -> None:
        """Start the worker so queued jobs begin executing."""
        await self.worker.start()
        self._is_open = True
        self._logger.debug(f"Job manager open (queue capacity {self.queue.capacity})")

    async def close(self) -> None:
        """Stop the worker and abandon handoffs still waiting for queue space.

        Idempotent - safe to call multiple times.
        """
        self._is_open = False
        if self._handoffs:
            self._logger.warning(
                f"Abandoning {len(self._handoffs)} admitted job(s) still waiting "
                "for queue space"
            )
            for task in self._handoffs:
                task.cancel()
            await asyncio.gather(*self._handoffs, return_exceptions=True)
            self._handoffs.clear()
        if self.worker.is_running and self.tracker.running_job_id is not None:
            self._logger.warning(
                f"Interrupting running job {self.tracker.running_job_id[:12]}"
            )
        await self.worker.stop()
        self._logger.info(f"Job manager closed: {self.tracker.summary()}")

    def submit(self, job: Job) -> None:
        """Hand a job to the queue without waiting for space.

        While the queue is saturated, concurrent handoffs may enter it in a
        different order than they were submitted. Execution always follows
        the order in which jobs entered the queue.

        Raises:
            ManagerNotInitializedError: If the manager has not been opened.
        """
        if not self._is_open:
            raise ManagerNotInitializedError(
                "JobManager must be opened before jobs are submitted"
            )
        task = asyncio.create_task(self.queue.put(job), name=f"handoff-{job.id.short}")
        self._handoffs.add(task)
        task.add_done_callback(self._handoff_done)

    def _handoff_done(self, task: asyncio.Task[None]) -> None:
        self._handoffs.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._logger.error(f"Job handoff {task.get_name()} failed: {exc}")

    async def wait_until_idle(self, timeout: float | None = None) -> None:
        """Wait until every submitted job has been handed off and executed.

        Raises:
            asyncio.TimeoutError: If timeout is exceeded
        """

        async def _drain() -> None:
            while self._handoffs:
                await asyncio.gather(*list(self._handoffs), return_exceptions=True)
            await self.queue.join()

        await asyncio.wait_for(_drain(), timeout=timeout)
