"""Event infrastructure - job event types and status-keyed emitters."""

from .base import BaseEmitter, JobEventHandler
from .emitter import EventEmitter
from .models import (
    JobCompletedEvent,
    JobEvent,
    JobFailedEvent,
    JobQueuedEvent,
    JobStartedEvent,
)
from .null import NullEmitter

__all__ = [
    "BaseEmitter",
    "EventEmitter",
    "JobEventHandler",
    "NullEmitter",
    "JobEvent",
    "JobQueuedEvent",
    "JobStartedEvent",
    "JobCompletedEvent",
    "JobFailedEvent",
]
