"""Pytest configuration and fixtures for mirrorgate tests."""

import asyncio
import typing as t
from pathlib import Path

import loguru
import pytest
from blockbuster import BlockBuster, blockbuster_ctx
from typer.testing import CliRunner

from mirrorgate.admission.identity import generate_job_id
from mirrorgate.app import create_app
from mirrorgate.config.settings import Environment, LogLevel, Settings
from mirrorgate.domain.jobs import CommandDescriptor, Job
from mirrorgate.events import BaseEmitter, EventEmitter
from mirrorgate.infrastructure.logging import reset_logging
from mirrorgate.jobs.runner import BaseRunner

TEST_SECRET = "correct horse battery staple"


class RecordingRunner(BaseRunner):
    """Fake runner that records commands instead of spawning processes.

    ``results`` maps the zero-based call index to an exit status or an
    exception to raise; unlisted calls exit with 0. ``active``/``max_active``
    expose how many runs overlapped in time.
    """

    def __init__(
        self,
        results: dict[int, int | BaseException] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.commands: list[CommandDescriptor] = []
        self.active = 0
        self.max_active = 0
        self._results = dict(results or {})
        self._delay = delay

    async def run(self, command: CommandDescriptor) -> int:
        index = len(self.commands)
        self.commands.append(command)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self._delay)
            result = self._results.get(index, 0)
            if isinstance(result, BaseException):
                raise result
            return result
        finally:
            self.active -= 1


@pytest.fixture(autouse=True)
def blockbuster() -> t.Iterator[BlockBuster]:
    """Detect blocking calls made by mirrorgate inside the event loop."""
    with blockbuster_ctx(scanned_modules=["mirrorgate"]) as bb:
        yield bb


@pytest.fixture(autouse=True)
def clean_logging_state():
    """Automatically reset logging before each test for isolation."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Provide test-specific settings (cheap bcrypt, quiet logging)."""
    return Settings(
        environment=Environment.TESTING,
        log_level=LogLevel.CRITICAL,
        secret=TEST_SECRET,
        output_dir=tmp_path,
        segments=5,
        files=3,
        bcrypt_rounds=4,
    )


@pytest.fixture
def test_app(test_settings):
    """Provide a test app with clean logging state."""
    reset_logging()
    app = create_app(test_settings)
    yield app
    reset_logging()


@pytest.fixture
def mock_logger(mocker):
    """Provide a mock logger for testing that captures log calls."""
    return mocker.Mock(spec=loguru.logger)


@pytest.fixture
def mock_emitter(mocker):
    """Provide a mock event emitter for testing event emission."""
    return mocker.AsyncMock(spec=BaseEmitter)


@pytest.fixture
def real_emitter(mock_logger):
    """Provide a real EventEmitter for tests that subscribe to events."""
    return EventEmitter(mock_logger)


@pytest.fixture
def make_runner() -> t.Callable[..., RecordingRunner]:
    return RecordingRunner


@pytest.fixture
def make_job(tmp_path: Path) -> t.Callable[..., Job]:
    """Factory fixture for jobs whose command names ``path``."""

    def _make_job(path: str = "/pub/file.iso") -> Job:
        return Job(
            id=generate_job_id(),
            command=CommandDescriptor(
                executable="lftp",
                args=("-e", f"pget -n 1 '{path}' && exit", "ftp://example.com:21"),
                cwd=tmp_path,
            ),
        )

    return _make_job


@pytest.fixture
def cli_runner():
    """Provide Typer CLI test runner."""
    return CliRunner()
