"""Command runners that spawn the mirroring program."""

import asyncio
import typing as t
from abc import ABC, abstractmethod

from ..domain.jobs import CommandDescriptor
from ..infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru


class BaseRunner(ABC):
    """Interface for executing a command descriptor to completion."""

    @abstractmethod
    async def run(self, command: CommandDescriptor) -> int:
        """Run ``command`` and return its exit status.

        Raises:
            OSError: If the process cannot be spawned.
        """
        pass


class SubprocessRunner(BaseRunner):
    """Runs commands as child processes of the gateway.

    The child gets the descriptor's working directory and, by default,
    the gateway's own stdout/stderr, so lftp output lands in the service
    log stream.
    """

    def __init__(self, logger: "loguru.Logger" = get_logger(__name__)) -> None:
        self._logger = logger

    async def run(self, command: CommandDescriptor) -> int:
        process = await asyncio.create_subprocess_exec(
            command.executable,
            *command.args,
            cwd=command.cwd,
            stdout=command.stdout,
            stderr=command.stderr,
        )
        self._logger.debug(f"Spawned {command.executable} (pid {process.pid})")
        try:
            return await process.wait()
        except asyncio.CancelledError:
            # Shutting down mid-transfer: do not leave an orphaned lftp behind.
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise
