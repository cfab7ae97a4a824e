import shutil
from dataclasses import dataclass

from .admission.auth import SecretHash
from .config.settings import Settings
from .domain.exceptions import ExecutableNotFoundError
from .infrastructure.logging import setup_logging


@dataclass(frozen=True)
class App:
    """Application wiring container.

    Holds the validated settings and the secret hash derived from them once
    at startup. Components receive what they need from here explicitly.
    """

    settings: Settings
    secret_hash: SecretHash


def create_app(settings: Settings) -> App:
    """Configure logging and derive process-wide state from ``settings``.

    Keep logic here minimal so boot is predictable and test-friendly.
    """
    setup_logging(settings)
    secret_hash = SecretHash.from_secret(
        settings.secret.get_secret_value(), rounds=settings.bcrypt_rounds
    )
    return App(settings=settings, secret_hash=secret_hash)


def require_executable(name: str) -> str:
    """Resolve ``name`` on PATH.

    Raises:
        ExecutableNotFoundError: If it cannot be found.
    """
    path = shutil.which(name)
    if path is None:
        raise ExecutableNotFoundError(name)
    return path
