"""Emitter used where nobody observes job events."""

from ..domain.jobs import JobStatus
from .base import BaseEmitter, JobEventHandler
from .models import JobEvent


class NullEmitter(BaseEmitter):
    """Accepts subscriptions and events and drops both.

    A standalone JobQueue defaults to this; inside a JobManager the queue
    shares the manager's EventEmitter instead.
    """

    def on(self, status: JobStatus, handler: JobEventHandler) -> None:
        pass

    def off(self, status: JobStatus, handler: JobEventHandler) -> None:
        pass

    async def emit(self, event: JobEvent) -> None:
        pass
