"""CLI state container."""

import typing as t

from ..app import App
from ..config.settings import LogLevel, Settings
from ..server.gateway import run_server

ServerRunner = t.Callable[[App], None]


class CLIState:
    """Application state container for CLI commands.

    Holds global option values and the injectable pieces commands need
    (settings override for tests, the function that serves the app).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        log_level: LogLevel | None = None,
        server_runner: ServerRunner = run_server,
    ):
        self.settings = settings
        self.log_level = log_level
        self.server_runner = server_runner
