"""Job execution - queue, worker, runner, tracker and manager."""

from .manager import JobManager
from .queue import JobQueue
from .runner import BaseRunner, SubprocessRunner
from .tracker import JobTracker
from .worker import JobWorker

__all__ = [
    "BaseRunner",
    "JobManager",
    "JobQueue",
    "JobTracker",
    "JobWorker",
    "SubprocessRunner",
]
