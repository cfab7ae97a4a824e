"""Tests for FTPCredentialVerifier."""

import ftplib
import socket

import pytest

from mirrorgate.admission.preflight import FTPCredentialVerifier
from mirrorgate.domain.exceptions import FTPConnectionError, UnauthorizedError
from mirrorgate.domain.requests import Credentials, Locator


@pytest.fixture
def mock_ftp(mocker):
    """Patch ftplib.FTP in the preflight module; returns the instance mock."""
    ftp_class = mocker.patch("mirrorgate.admission.preflight.FTP")
    return ftp_class.return_value


@pytest.fixture
def locator() -> Locator:
    return Locator(scheme="ftp", host="ftp.example.com", port=2121, path="/pub/")


@pytest.fixture
def verifier(mock_logger) -> FTPCredentialVerifier:
    return FTPCredentialVerifier(timeout=5.0, logger=mock_logger)


class TestSuccessfulPreflight:
    @pytest.mark.asyncio
    async def test_logs_in_with_supplied_credentials(self, verifier, locator, mock_ftp):
        await verifier.verify(locator, Credentials(username="alice", password="pw"))

        mock_ftp.connect.assert_called_once_with("ftp.example.com", 2121, timeout=5.0)
        mock_ftp.login.assert_called_once_with("alice", "pw")

    @pytest.mark.asyncio
    async def test_anonymous_login_when_no_credentials(self, verifier, locator, mock_ftp):
        await verifier.verify(locator, Credentials())

        mock_ftp.login.assert_called_once_with("anonymous", "anonymous")

    @pytest.mark.asyncio
    async def test_partial_credentials_are_anonymous(self, verifier, locator, mock_ftp):
        await verifier.verify(locator, Credentials(username="alice"))

        mock_ftp.login.assert_called_once_with("anonymous", "anonymous")

    @pytest.mark.asyncio
    async def test_configurable_anonymous_identity(self, locator, mock_ftp, mock_logger):
        verifier = FTPCredentialVerifier(
            anonymous_username="ftp",
            anonymous_password="guest@example.com",
            logger=mock_logger,
        )

        await verifier.verify(locator, Credentials())

        mock_ftp.login.assert_called_once_with("ftp", "guest@example.com")

    @pytest.mark.asyncio
    async def test_logs_out_and_closes(self, verifier, locator, mock_ftp):
        await verifier.verify(locator, Credentials())

        mock_ftp.quit.assert_called_once()
        mock_ftp.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_failed_logout_is_not_an_error(self, verifier, locator, mock_ftp):
        mock_ftp.quit.side_effect = EOFError()

        await verifier.verify(locator, Credentials())

        mock_ftp.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_uses_timeout(self, locator, mocker, mock_logger):
        ftp_class = mocker.patch("mirrorgate.admission.preflight.FTP")
        verifier = FTPCredentialVerifier(timeout=1.5, logger=mock_logger)

        await verifier.verify(locator, Credentials())

        ftp_class.assert_called_once_with(timeout=1.5)


class TestConnectionFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError(),
            socket.timeout("timed out"),
            socket.gaierror("name resolution failed"),
            EOFError(),
        ],
    )
    async def test_connect_failure_names_host(self, verifier, locator, mock_ftp, error):
        mock_ftp.connect.side_effect = error

        with pytest.raises(FTPConnectionError) as exc_info:
            await verifier.verify(locator, Credentials())

        assert exc_info.value.message == "Unable to connect to FTP server at ftp.example.com"
        mock_ftp.login.assert_not_called()
        mock_ftp.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_connection_dropped_during_login(self, verifier, locator, mock_ftp):
        mock_ftp.login.side_effect = ConnectionResetError()

        with pytest.raises(FTPConnectionError):
            await verifier.verify(locator, Credentials())


class TestLoginFailures:
    @pytest.mark.asyncio
    async def test_rejected_login_is_unauthorized(self, verifier, locator, mock_ftp):
        mock_ftp.login.side_effect = ftplib.error_perm("530 Login incorrect.")

        with pytest.raises(UnauthorizedError, match="Missing or invalid credentials"):
            await verifier.verify(locator, Credentials(username="alice", password="bad"))

        mock_ftp.quit.assert_not_called()
        mock_ftp.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_temporary_login_error_is_unauthorized(self, verifier, locator, mock_ftp):
        mock_ftp.login.side_effect = ftplib.error_temp("421 Too many users")

        with pytest.raises(UnauthorizedError):
            await verifier.verify(locator, Credentials())
