"""Shared fixtures for CLI tests."""

import pytest

from mirrorgate.cli.app import create_cli_app


@pytest.fixture
def served_apps():
    """Collects every App handed to the server runner."""
    return []


@pytest.fixture
def default_app(served_apps):
    """Provide CLI app that records the served App instead of blocking."""
    return create_cli_app(server_runner=served_apps.append)


@pytest.fixture
def injected_app(test_settings, served_apps):
    """Provide CLI app with test settings injected."""
    return create_cli_app(settings=test_settings, server_runner=served_apps.append)


@pytest.fixture
def lftp_on_path(mocker):
    return mocker.patch("mirrorgate.app.shutil.which", return_value="/usr/bin/lftp")


@pytest.fixture(autouse=True)
def no_secret_env(monkeypatch):
    monkeypatch.delenv("MIRRORGATE_SECRET", raising=False)
