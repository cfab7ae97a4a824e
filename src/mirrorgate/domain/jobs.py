"""Job identity, command descriptors and job lifecycle states."""

import enum
from dataclasses import dataclass, field
from pathlib import Path

JOB_ID_BYTES = 32
SHORT_ID_BYTES = 6


class JobStatus(enum.StrEnum):
    """Job lifecycle states.

    Flow: ADMITTED -> QUEUED -> RUNNING -> (COMPLETED | FAILED)
    """

    ADMITTED = "admitted"  # Preflight passed, handoff scheduled
    QUEUED = "queued"  # Sitting in the job queue
    RUNNING = "running"  # Command executing
    COMPLETED = "completed"  # Command exited with status 0
    FAILED = "failed"  # Non-zero exit or spawn error


@dataclass(frozen=True)
class JobID:
    """256-bit job identifier.

    ``hex`` is the stable identity returned to callers. ``short`` is a
    display-only prefix for log lines and is not unique.
    """

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != JOB_ID_BYTES:
            raise ValueError(f"JobID must be {JOB_ID_BYTES} bytes")

    @property
    def hex(self) -> str:
        return self.value.hex()

    @property
    def short(self) -> str:
        return self.value[:SHORT_ID_BYTES].hex()

    def __str__(self) -> str:
        return self.hex


@dataclass(frozen=True)
class CommandDescriptor:
    """Everything needed to spawn the mirroring program once.

    ``stdout``/``stderr`` follow asyncio.subprocess conventions: None means
    the child inherits the parent's stream.
    """

    executable: str
    args: tuple[str, ...]
    cwd: Path
    stdout: int | None = None
    stderr: int | None = None

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.executable, *self.args)

    def redacted(self) -> str:
        """Render the command for logs with the login password masked."""
        parts = list(self.argv)
        for index, part in enumerate(parts[:-1]):
            if part == "-u" and "," in parts[index + 1]:
                user, _ = parts[index + 1].split(",", 1)
                parts[index + 1] = f"{user},***"
        return " ".join(parts)


@dataclass(frozen=True)
class Job:
    """A unit of work: one identity, one command, executed exactly once."""

    id: JobID
    command: CommandDescriptor = field(compare=False)
