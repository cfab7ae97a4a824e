"""Job outcome tracking fed by lifecycle events."""

import typing as t
from collections import Counter

from ..domain.jobs import JobStatus
from ..events import BaseEmitter, JobEvent
from ..infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru


class JobTracker:
    """Observes job events and keeps running totals.

    Records how many jobs were queued, started, completed and failed, and
    which job is running right now. Only totals are kept: job state is not
    persisted, so finished jobs are forgotten.

    Usage:
        tracker = JobTracker()
        tracker.attach(manager.emitter)
        ...
        tracker.count(JobStatus.FAILED)
    """

    OBSERVED_STATUSES = (
        JobStatus.QUEUED,
        JobStatus.RUNNING,
        JobStatus.COMPLETED,
        JobStatus.FAILED,
    )

    def __init__(self, logger: "loguru.Logger" = get_logger(__name__)) -> None:
        self._logger = logger
        self._counts: Counter[JobStatus] = Counter()
        self._running_job_id: str | None = None

    def attach(self, emitter: BaseEmitter) -> None:
        """Subscribe to every lifecycle status on ``emitter``."""
        for status in self.OBSERVED_STATUSES:
            emitter.on(status, self.record)

    def detach(self, emitter: BaseEmitter) -> None:
        for status in self.OBSERVED_STATUSES:
            emitter.off(status, self.record)

    def record(self, event: JobEvent) -> None:
        self._counts[event.status] += 1
        if event.status == JobStatus.RUNNING:
            self._running_job_id = event.job_id
        elif event.job_id == self._running_job_id:
            self._running_job_id = None
        self._logger.debug(f"Job {event.job_id[:12]} is {event.status}")

    def count(self, status: JobStatus) -> int:
        return self._counts[status]

    @property
    def running_job_id(self) -> str | None:
        """Full id of the job currently executing, if any."""
        return self._running_job_id

    @property
    def waiting(self) -> int:
        """Jobs that entered the queue and have not started yet."""
        return self._counts[JobStatus.QUEUED] - self._counts[JobStatus.RUNNING]

    def summary(self) -> str:
        return (
            f"{self.count(JobStatus.COMPLETED)} completed, "
            f"{self.count(JobStatus.FAILED)} failed, "
            f"{self.waiting} still queued"
        )
