"""Single sequential worker that executes queued jobs.

This module provides a JobWorker class that consumes the job queue one job
at a time, so at most one mirroring process runs at any moment.
"""

import asyncio
import time
import typing as t

from ..domain.exceptions import ExecutionError, WorkerAlreadyStartedError
from ..domain.jobs import Job
from ..events import (
    EventEmitter,
    JobCompletedEvent,
    JobFailedEvent,
    JobStartedEvent,
)
from ..events.base import BaseEmitter
from ..infrastructure.logging import get_logger
from .queue import JobQueue
from .runner import BaseRunner, SubprocessRunner

if t.TYPE_CHECKING:
    import loguru


class JobWorker:
    """Sole consumer of the job queue.

    Each job runs to completion before the next is dequeued. A failing job
    (non-zero exit or spawn error) is logged and dropped; the loop always
    moves on to the next job. There is no retry.

    Implementation decisions:
    - Uses dependency injection for runner, logger and emitter so tests can
      substitute a fake runner and observe lifecycle events
    - task_done() is called for every dequeued job, including failures, so
      queue.join() reflects completed work
    - Cancellation (stop()) propagates out of the loop immediately

    Usage:
        worker = JobWorker(queue=queue, runner=SubprocessRunner())
        await worker.start()
        ...
        await worker.stop()
    """

    def __init__(
        self,
        queue: JobQueue,
        runner: BaseRunner | None = None,
        logger: "loguru.Logger" = get_logger(__name__),
        emitter: BaseEmitter | None = None,
    ) -> None:
        """Initialise the worker.

        Args:
            queue: Job queue to consume from
            runner: Executes command descriptors. Defaults to SubprocessRunner.
            logger: Logger instance for recording job outcomes
            emitter: Event emitter for RUNNING, COMPLETED and FAILED events.
                    If None, a new EventEmitter will be created.
        """
        self.queue = queue
        self._runner = runner if runner is not None else SubprocessRunner(logger)
        self._logger = logger
        self._emitter = emitter if emitter is not None else EventEmitter(logger)
        self._task: asyncio.Task[None] | None = None

    @property
    def emitter(self) -> BaseEmitter:
        return self._emitter

    @property
    def is_running(self) -> bool:
        """True if the consumer task has been started and not yet stopped."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the consumer task.

        Raises:
            WorkerAlreadyStartedError: If the worker is already running
        """
        if self.is_running:
            raise WorkerAlreadyStartedError("JobWorker already started")
        self._task = asyncio.create_task(self._process_queue())

    async def stop(self) -> None:
        """Cancel the consumer task and wait for it to finish cancelling.

        A job that is running at this point is interrupted; its child process
        is killed by the runner.
        """
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None

    async def _process_queue(self) -> None:
        while True:
            job = await self.queue.get_next()
            try:
                await self.execute(job)
            except asyncio.CancelledError:
                self._logger.debug(f"Worker cancelled while running job {job.id.short}")
                raise
            except Exception as exc:
                # execute() handles expected failures; anything else is a bug
                # in an event handler or runner, and must not kill the loop.
                self._logger.exception(
                    f"Unexpected error in job {job.id.short}: {type(exc).__name__}: {exc}"
                )
            finally:
                self.queue.task_done()

    async def execute(self, job: Job) -> bool:
        """Run one job to completion.

        Returns:
            True if the command exited with status 0, False otherwise.
        """
        self._logger.info(f"Job {job.id.short} started: {job.command.redacted()}")
        await self._emitter.emit(JobStartedEvent(job_id=job.id.hex))
        started_at = time.monotonic()

        try:
            await self._run(job)
        except ExecutionError as exc:
            duration = time.monotonic() - started_at
            self._logger.error(f"{exc} after {duration:.1f}s")
            await self._emitter.emit(
                JobFailedEvent(
                    job_id=job.id.hex,
                    returncode=exc.returncode,
                    error_message=str(exc),
                    duration_seconds=duration,
                ),
            )
            return False

        duration = time.monotonic() - started_at
        self._logger.info(f"Job {job.id.short} completed in {duration:.1f}s")
        await self._emitter.emit(
            JobCompletedEvent(job_id=job.id.hex, duration_seconds=duration),
        )
        return True

    async def _run(self, job: Job) -> None:
        try:
            returncode = await self._runner.run(job.command)
        except OSError as exc:
            raise ExecutionError(job.id.short, reason=str(exc)) from exc
        if returncode != 0:
            raise ExecutionError(job.id.short, returncode=returncode)
