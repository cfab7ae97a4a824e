"""Domain layer - core models and exceptions."""

from .exceptions import (
    AdmissionError,
    ExecutableNotFoundError,
    ExecutionError,
    FTPConnectionError,
    InvalidFormatError,
    InvalidURLError,
    ManagerNotInitializedError,
    MirrorGateError,
    MissingURLError,
    ProtocolMismatchError,
    RandomSourceError,
    TokenMismatchError,
    UnauthorizedError,
    WorkerAlreadyStartedError,
)
from .jobs import CommandDescriptor, Job, JobID, JobStatus
from .requests import Credentials, Locator, TransferRequest

__all__ = [
    # Models
    "CommandDescriptor",
    "Credentials",
    "Job",
    "JobID",
    "JobStatus",
    "Locator",
    "TransferRequest",
    # Exceptions
    "AdmissionError",
    "ExecutableNotFoundError",
    "ExecutionError",
    "FTPConnectionError",
    "InvalidFormatError",
    "InvalidURLError",
    "ManagerNotInitializedError",
    "MirrorGateError",
    "MissingURLError",
    "ProtocolMismatchError",
    "RandomSourceError",
    "TokenMismatchError",
    "UnauthorizedError",
    "WorkerAlreadyStartedError",
]
