"""Logging setup built on loguru.

Components never configure sinks themselves: they call ``get_logger`` (or
receive an injected logger) and the application entry point decides the
level and format through ``setup_logging``.
"""

import sys
import typing as t

from loguru import logger

from ..config.settings import Environment, LogLevel, Settings

if t.TYPE_CHECKING:
    import loguru

_DEVELOPMENT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> - <level>{message}</level>"
)
_PRODUCTION_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]} - {message}"
)

_configured = False


def configure_logger(
    level: LogLevel | str = LogLevel.INFO,
    environment: Environment = Environment.DEVELOPMENT,
) -> None:
    """Replace all sinks with a single stderr sink for the given environment."""
    global _configured

    logger.remove()
    # Records emitted through the bare loguru logger carry no component.
    logger.configure(extra={"component": "-"})

    if environment == Environment.PRODUCTION:
        logger.add(
            sys.stderr,
            level=str(level),
            format=_PRODUCTION_FORMAT,
            colorize=False,
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            level=str(level),
            format=_DEVELOPMENT_FORMAT,
            colorize=True,
            backtrace=True,
            diagnose=environment == Environment.DEVELOPMENT,
        )
    _configured = True


def setup_logging(settings: Settings) -> None:
    """Configure logging from application settings."""
    configure_logger(level=settings.log_level, environment=settings.environment)


def get_logger(name: str) -> "loguru.Logger":
    """Return a logger bound to ``name``, configuring defaults on first use."""
    if not _configured:
        configure_logger()
    return logger.bind(component=name)


def reset_logging() -> None:
    """Remove every sink and forget the current configuration."""
    global _configured
    logger.remove()
    _configured = False


def is_configured() -> bool:
    return _configured
