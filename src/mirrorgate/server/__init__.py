"""HTTP gateway."""

from .gateway import ENDPOINT, create_web_app, run_server, status_for

__all__ = ["ENDPOINT", "create_web_app", "run_server", "status_for"]
