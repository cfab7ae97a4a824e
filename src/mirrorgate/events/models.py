"""Events emitted by the job queue and the worker.

Each event type reports exactly one JobStatus; emitters route on it.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from ..domain.jobs import JobStatus


class JobEvent(BaseModel):
    """Base class for job lifecycle events.

    All job events carry the full job id so observers can correlate them;
    log lines use the short form instead.
    """

    model_config = ConfigDict(frozen=True)

    job_id: str = Field(description="Full hex job identifier")
    status: JobStatus
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class JobQueuedEvent(JobEvent):
    """Emitted once a job has been placed in the queue."""

    status: JobStatus = JobStatus.QUEUED
    queue_size: int = Field(default=0, ge=0, description="Queue size after enqueue")


class JobStartedEvent(JobEvent):
    """Emitted right before the worker spawns the job's command."""

    status: JobStatus = JobStatus.RUNNING


class JobCompletedEvent(JobEvent):
    """Emitted when the command exits with status 0."""

    status: JobStatus = JobStatus.COMPLETED
    duration_seconds: float = Field(default=0.0, ge=0.0)


class JobFailedEvent(JobEvent):
    """Emitted when the command exits non-zero or cannot be spawned."""

    status: JobStatus = JobStatus.FAILED
    returncode: int | None = Field(default=None, description="Exit status if any")
    error_message: str = Field(default="", description="Error message")
    duration_seconds: float = Field(default=0.0, ge=0.0)
