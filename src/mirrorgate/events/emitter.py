"""In-process event emitter for job lifecycle events."""

import inspect
import typing as t
from collections import defaultdict

from ..domain.jobs import JobStatus
from ..infrastructure.logging import get_logger
from .base import BaseEmitter, JobEventHandler
from .models import JobEvent

if t.TYPE_CHECKING:
    import loguru


class EventEmitter(BaseEmitter):
    """Dispatches job events to handlers subscribed by status.

    Handlers may be plain functions or coroutine functions. A failing
    handler is logged and does not stop the remaining handlers, so an
    observer can never break the queue or the worker.
    """

    def __init__(self, logger: "loguru.Logger" = get_logger(__name__)) -> None:
        self._logger = logger
        self._handlers: dict[JobStatus, list[JobEventHandler]] = defaultdict(list)

    def on(self, status: JobStatus, handler: JobEventHandler) -> None:
        self._handlers[status].append(handler)

    def off(self, status: JobStatus, handler: JobEventHandler) -> None:
        handlers = self._handlers.get(status, [])
        if handler not in handlers:
            self._logger.warning(f"Handler {handler} not found for {status} events")
            return
        handlers.remove(handler)

    async def emit(self, event: JobEvent) -> None:
        # Copy so handlers can unsubscribe while being dispatched.
        for handler in list(self._handlers.get(event.status, [])):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                self._logger.error(
                    f"Handler {handler} failed for {event.status} event "
                    f"of job {event.job_id[:12]}: {exc}"
                )
