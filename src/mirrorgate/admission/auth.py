"""Shared-secret authentication.

The configured secret is hashed once at startup with bcrypt and only the
hash is kept. Callers' secrets are checked with ``bcrypt.checkpw``, which
compares in constant time, so no raw secret is ever compared byte by byte.
"""

import asyncio
import base64
import hashlib
import typing as t
from dataclasses import dataclass

import bcrypt

from ..domain.exceptions import TokenMismatchError
from ..infrastructure.logging import get_logger

if t.TYPE_CHECKING:
    import loguru

DEFAULT_ROUNDS = 12


def _prehash(secret: str) -> bytes:
    """Reduce a secret to 44 bytes so bcrypt's 72-byte limit never truncates."""
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    return base64.b64encode(digest)


@dataclass(frozen=True)
class SecretHash:
    """Process-wide bcrypt hash of the configured secret."""

    value: bytes

    @classmethod
    def from_secret(cls, secret: str, rounds: int = DEFAULT_ROUNDS) -> "SecretHash":
        salt = bcrypt.gensalt(rounds=rounds)
        return cls(bcrypt.hashpw(_prehash(secret), salt))

    def matches(self, secret: str) -> bool:
        return bool(bcrypt.checkpw(_prehash(secret), self.value))

    def __repr__(self) -> str:
        return "SecretHash(<redacted>)"


class AuthGate:
    """Rejects callers whose secret does not match the configured hash."""

    def __init__(
        self,
        secret_hash: SecretHash,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        self._secret_hash = secret_hash
        self._logger = logger

    async def verify(self, secret: str) -> None:
        """Check ``secret`` against the configured hash.

        The bcrypt check runs in a worker thread.

        Raises:
            TokenMismatchError: If the secret does not match.
        """
        if not await asyncio.to_thread(self._secret_hash.matches, secret):
            self._logger.debug("Secret token rejected")
            raise TokenMismatchError()
