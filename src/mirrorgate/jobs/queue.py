"""Bounded FIFO queue between admission and execution.

This module provides a JobQueue class that wraps a bounded asyncio.Queue.
Admission paths produce into it and the single worker consumes from it.
"""

import asyncio
import typing as t

from ..domain.jobs import Job
from ..events import JobQueuedEvent, NullEmitter
from ..events.base import BaseEmitter
from ..infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru

DEFAULT_CAPACITY = 10


class JobQueue:
    """Fixed-capacity FIFO of jobs.

    Key features:
    - Strict FIFO: jobs come out in the order they went in
    - Backpressure: put() blocks while the queue is full, nothing is dropped
    - Event emission when a job is enqueued (QUEUED status)
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        queue: asyncio.Queue[Job] | None = None,
        logger: t.Optional["loguru.Logger"] = None,
        emitter: BaseEmitter | None = None,
    ) -> None:
        """Initialise the job queue.

        Args:
            capacity: Maximum number of waiting jobs. Ignored when ``queue``
                     is given.
            queue: Optional asyncio.Queue instance for dependency injection.
            logger: Logger instance for recording queue events. If None,
                   a default logger will be created.
            emitter: Event emitter for QUEUED events. If None,
                    a NullEmitter is used (no events emitted).
        """
        if capacity < 1:
            raise ValueError("Queue capacity must be at least 1")
        self._queue = queue if queue is not None else asyncio.Queue(maxsize=capacity)
        self._logger = logger or get_logger(__name__)
        self._emitter = emitter or NullEmitter()

    @property
    def emitter(self) -> BaseEmitter:
        """Event emitter for queue events (QUEUED status)."""
        return self._emitter

    @property
    def capacity(self) -> int:
        return self._queue.maxsize

    async def put(self, job: Job) -> None:
        """Append a job, waiting for a free slot if the queue is full."""
        if self._queue.full():
            self._logger.warning(
                f"Job queue full ({self.capacity} jobs), "
                f"job {job.id.short} waiting for a free slot"
            )
        await self._queue.put(job)
        self._logger.info(f"Job {job.id.short} queued ({self.size()} waiting)")
        await self._emitter.emit(
            JobQueuedEvent(job_id=job.id.hex, queue_size=self.size()),
        )

    async def get_next(self) -> Job:
        """Remove and return the oldest job, waiting until one is available."""
        self._logger.debug("Waiting for a job to be available from the queue...")
        return await self._queue.get()

    def task_done(self) -> None:
        """Mark the most recently retrieved job as finished."""
        self._queue.task_done()

    def is_empty(self) -> bool:
        return self._queue.empty()

    def is_full(self) -> bool:
        return self._queue.full()

    def size(self) -> int:
        return self._queue.qsize()

    async def join(self) -> None:
        """Wait until every queued job has been marked done."""
        await self._queue.join()
