"""mirrorgate - HTTP control plane for queued lftp mirror jobs."""

from .app import App, create_app
from .config.settings import Settings

__all__ = ["App", "Settings", "create_app"]
