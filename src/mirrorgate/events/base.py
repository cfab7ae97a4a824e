"""Emitter interface for job lifecycle events."""

import typing as t
from abc import ABC, abstractmethod

from ..domain.jobs import JobStatus
from .models import JobEvent

JobEventHandler = t.Callable[[JobEvent], t.Awaitable[None] | None]


class BaseEmitter(ABC):
    """Publishes job events to handlers subscribed by job status.

    Each event carries the status it reports, so ``emit`` needs no separate
    event name: handlers registered for ``event.status`` receive it.
    """

    @abstractmethod
    def on(self, status: JobStatus, handler: JobEventHandler) -> None:
        """Subscribe ``handler`` to events reporting ``status``."""
        pass

    @abstractmethod
    def off(self, status: JobStatus, handler: JobEventHandler) -> None:
        """Remove a handler previously registered with ``on``."""
        pass

    @abstractmethod
    async def emit(self, event: JobEvent) -> None:
        """Deliver ``event`` to the handlers subscribed to its status."""
        pass
