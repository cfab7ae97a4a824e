import enum
import typing as t
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class Environment(enum.StrEnum):
    """Runtime environment for the application.

    Kept small and explicit to support simple environment-driven behavior
    (log formatting) without introducing configuration dependencies.
    """

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(enum.StrEnum):
    """Log levels understood by loguru."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseModel):
    """Startup configuration, validated once and read-only afterwards.

    The CLI layer decides how values are populated; everything below the
    CLI receives an already-validated instance.
    """

    model_config = ConfigDict(frozen=True)

    environment: Environment = Environment.PRODUCTION
    log_level: LogLevel = LogLevel.INFO

    host: str = Field(default="0.0.0.0", description="Interface to listen on")
    port: int = Field(default=7800, ge=1024, le=65535, description="Listen port")
    secret: SecretStr = Field(description="Shared secret callers must present")

    segments: int = Field(
        default=4, ge=1, le=100, description="Parallel segments per file"
    )
    files: int = Field(
        default=2, ge=1, le=10, description="Parallel files in mirror mode"
    )
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory transfers are written to",
    )

    queue_capacity: int = Field(default=10, ge=1, description="Job queue size")
    preflight_timeout: float = Field(
        default=5.0, gt=0, description="Connect/operation timeout for preflight"
    )
    executable: str = Field(default="lftp", description="Mirroring program")
    anonymous_username: str = "anonymous"
    anonymous_password: str = "anonymous"
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    @field_validator("secret")
    @classmethod
    def _require_secret(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("Secret must not be empty")
        return value

    @field_validator("output_dir")
    @classmethod
    def _require_directory(cls, value: Path) -> Path:
        if not value.exists():
            raise ValueError(f"Output directory {value} does not exist")
        if not value.is_dir():
            raise ValueError(f"Output path {value} is not a directory")
        return value


def build_settings(**overrides: t.Any) -> Settings:
    """Build Settings from keyword overrides, ignoring ``None`` values.

    Lets the CLI pass every option straight through while unset options fall
    back to the model defaults.
    """
    filtered = {key: value for key, value in overrides.items() if value is not None}
    return Settings(**filtered)
