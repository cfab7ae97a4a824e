"""Preflight verification of FTP credentials.

Before a job takes a queue slot we log in to the target server once with
the credentials the transfer will use, then log straight out. The session
is never handed to lftp, which opens its own connection later.
"""

import asyncio
import ftplib
import typing as t
from abc import ABC, abstractmethod
from ftplib import FTP

from ..domain.exceptions import FTPConnectionError, UnauthorizedError
from ..domain.requests import Credentials, Locator
from ..infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru

DEFAULT_TIMEOUT = 5.0
ANONYMOUS_USERNAME = "anonymous"
ANONYMOUS_PASSWORD = "anonymous"


class BaseCredentialVerifier(ABC):
    """Interface for confirming credentials work before a job is queued."""

    @abstractmethod
    async def verify(self, locator: Locator, credentials: Credentials) -> None:
        """Confirm ``credentials`` can log in to ``locator``'s server.

        Raises:
            FTPConnectionError: If the server cannot be reached.
            UnauthorizedError: If the login is rejected.
        """
        pass


class FTPCredentialVerifier(BaseCredentialVerifier):
    """Verifies credentials with a throwaway ftplib login.

    Anonymous requests log in with the configured anonymous identity,
    mirroring what lftp does when no ``-u`` option is given.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        anonymous_username: str = ANONYMOUS_USERNAME,
        anonymous_password: str = ANONYMOUS_PASSWORD,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        self._timeout = timeout
        self._anonymous_username = anonymous_username
        self._anonymous_password = anonymous_password
        self._logger = logger

    async def verify(self, locator: Locator, credentials: Credentials) -> None:
        await asyncio.to_thread(self._login, locator, credentials)

    def _identity(self, credentials: Credentials) -> tuple[str, str]:
        if credentials.is_anonymous:
            return self._anonymous_username, self._anonymous_password
        return credentials.username, credentials.password

    def _login(self, locator: Locator, credentials: Credentials) -> None:
        """Blocking connect, login and logout. Runs in a worker thread."""
        username, password = self._identity(credentials)
        ftp = FTP(timeout=self._timeout)
        try:
            try:
                ftp.connect(locator.host, locator.port, timeout=self._timeout)
            except (OSError, EOFError, ftplib.Error) as exc:
                self._logger.warning(
                    f"Preflight connection to {locator.host}:{locator.port} "
                    f"failed: {exc}"
                )
                raise FTPConnectionError(locator.host) from exc

            try:
                ftp.login(username, password)
            except ftplib.Error as exc:
                self._logger.info(
                    f"Preflight login as {username!r} to {locator.host} "
                    f"rejected: {exc}"
                )
                raise UnauthorizedError() from exc
            except (OSError, EOFError) as exc:
                raise FTPConnectionError(locator.host) from exc

            self._logger.debug(f"Preflight login as {username!r} to {locator.host} ok")
            try:
                ftp.quit()
            except (OSError, EOFError, ftplib.Error) as exc:
                # Login already succeeded; a failed QUIT does not change that.
                self._logger.debug(f"Preflight logout from {locator.host}: {exc}")
        finally:
            ftp.close()
