"""HTTP boundary: request decoding, status mapping and response encoding."""

import os
import typing as t

from aiohttp import web

from ..admission.auth import AuthGate
from ..admission.command import CommandBuilder, TransferOptions
from ..admission.pipeline import AdmissionPipeline
from ..admission.preflight import BaseCredentialVerifier, FTPCredentialVerifier
from ..app import App
from ..domain.exceptions import AdmissionError, RandomSourceError, UnauthorizedError
from ..infrastructure.logging import get_logger
from ..jobs.manager import JobManager
from ..jobs.runner import BaseRunner

FatalHandler = t.Callable[[BaseException], None]

PIPELINE_KEY: web.AppKey[AdmissionPipeline] = web.AppKey("pipeline")
MANAGER_KEY: web.AppKey[JobManager] = web.AppKey("manager")
FATAL_HANDLER_KEY: web.AppKey[FatalHandler] = web.AppKey("fatal_handler")

ENDPOINT = "/jsonrpc"

logger = get_logger(__name__)


def status_for(error: AdmissionError) -> int:
    """HTTP status for an admission failure."""
    if isinstance(error, UnauthorizedError):
        return 401
    return 400


def terminate_process(exc: BaseException) -> None:
    """Abort the process immediately; no request-level recovery is possible."""
    os._exit(1)


async def handle_jsonrpc(request: web.Request) -> web.Response:
    pipeline = request.app[PIPELINE_KEY]
    body = await request.read()

    try:
        job_id = await pipeline.admit(body)
    except AdmissionError as exc:
        logger.warning(f"Rejected request from {request.remote}: {exc.message}")
        return web.json_response({"message": exc.message}, status=status_for(exc))
    except RandomSourceError as exc:
        logger.critical(f"Cannot generate job identifiers, shutting down: {exc}")
        request.app[FATAL_HANDLER_KEY](exc)
        raise web.HTTPInternalServerError() from exc

    return web.json_response({"id": job_id.hex})


async def _job_manager_ctx(web_app: web.Application) -> t.AsyncIterator[None]:
    manager = web_app[MANAGER_KEY]
    await manager.open()
    yield
    await manager.close()


def create_web_app(
    app: App,
    *,
    runner: BaseRunner | None = None,
    verifier: BaseCredentialVerifier | None = None,
    on_fatal: FatalHandler | None = None,
) -> web.Application:
    """Wire the admission pipeline and job manager into an aiohttp application.

    The job manager (and with it the worker) starts and stops with the
    application.

    Args:
        app: Application container with settings and secret hash
        runner: Command runner for the worker. Defaults to SubprocessRunner.
        verifier: Credential verifier. Defaults to FTPCredentialVerifier
                 configured from settings.
        on_fatal: Called when job ids can no longer be generated. Defaults
                 to terminating the process.
    """
    settings = app.settings
    manager = JobManager(capacity=settings.queue_capacity, runner=runner)
    if verifier is None:
        verifier = FTPCredentialVerifier(
            timeout=settings.preflight_timeout,
            anonymous_username=settings.anonymous_username,
            anonymous_password=settings.anonymous_password,
        )
    pipeline = AdmissionPipeline(
        auth_gate=AuthGate(app.secret_hash),
        verifier=verifier,
        builder=CommandBuilder(TransferOptions.from_settings(settings)),
        manager=manager,
    )

    web_app = web.Application()
    web_app[PIPELINE_KEY] = pipeline
    web_app[MANAGER_KEY] = manager
    web_app[FATAL_HANDLER_KEY] = on_fatal or terminate_process
    web_app.router.add_post(ENDPOINT, handle_jsonrpc)
    web_app.cleanup_ctx.append(_job_manager_ctx)
    return web_app


def run_server(app: App) -> None:
    """Serve until interrupted."""
    settings = app.settings
    logger.info(
        f"Listening on {settings.host}:{settings.port}, writing to "
        f"{settings.output_dir} ({settings.files} files x {settings.segments} segments)"
    )
    web.run_app(
        create_web_app(app),
        host=settings.host,
        port=settings.port,
        print=None,
    )
