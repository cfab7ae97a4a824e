"""Construction of lftp command descriptors.

Directories are fetched with ``mirror`` (parallel files, each split into
segments); single files with ``pget`` (parallel segments). Building is pure:
the same locator, credentials and options always give an equal descriptor.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from ..config.settings import Settings
from ..domain.jobs import CommandDescriptor
from ..domain.requests import Credentials, Locator

DEFAULT_EXECUTABLE = "lftp"

_SCRIPT_SPECIAL = re.compile(r"""(['"\\])""")


@dataclass(frozen=True)
class TransferOptions:
    """Process-wide transfer options applied to every job."""

    segments: int
    files: int
    output_dir: Path
    executable: str = DEFAULT_EXECUTABLE

    @classmethod
    def from_settings(cls, settings: Settings) -> "TransferOptions":
        return cls(
            segments=settings.segments,
            files=settings.files,
            output_dir=settings.output_dir,
            executable=settings.executable,
        )


def escape_path(path: str) -> str:
    """Backslash-escape quotes and backslashes for an lftp script argument."""
    return _SCRIPT_SPECIAL.sub(r"\\\1", path)


class CommandBuilder:
    """Turns a validated request into an lftp invocation."""

    def __init__(self, options: TransferOptions) -> None:
        self._options = options

    @property
    def options(self) -> TransferOptions:
        return self._options

    def script(self, locator: Locator) -> str:
        """The lftp ``-e`` script for ``locator``."""
        path = escape_path(locator.path or "/")
        if locator.is_directory:
            return (
                f"mirror --parallel={self._options.files} "
                f"--use-pget-n={self._options.segments} '{path}' && exit"
            )
        return f"pget -n {self._options.segments} '{path}' && exit"

    def build(self, locator: Locator, credentials: Credentials) -> CommandDescriptor:
        args: list[str] = []
        # Without -u lftp performs its own anonymous login.
        if not credentials.is_anonymous:
            args += ["-u", f"{credentials.username},{credentials.password}"]
        args += ["-e", self.script(locator), locator.address]

        return CommandDescriptor(
            executable=self._options.executable,
            args=tuple(args),
            cwd=self._options.output_dir,
        )
