"""Admission pipeline: from raw request body to a queued job."""

import typing as t

from ..domain.jobs import Job, JobID
from ..domain.requests import Credentials
from ..infrastructure.logging import get_logger
from ..jobs.manager import JobManager
from .auth import AuthGate
from .command import CommandBuilder
from .identity import generate_job_id
from .preflight import BaseCredentialVerifier
from .validator import extract_locator, parse_request

if t.TYPE_CHECKING:
    import loguru


class AdmissionPipeline:
    """Validates, authenticates and preflights a request, then hands off a job.

    Order matters: the secret check runs before the preflight login, so an
    unauthenticated caller never causes a network connection or a process
    spawn. ``admit`` returns as soon as the handoff is scheduled; the job
    itself runs later on the worker.
    """

    def __init__(
        self,
        auth_gate: AuthGate,
        verifier: BaseCredentialVerifier,
        builder: CommandBuilder,
        manager: JobManager,
        id_factory: t.Callable[[], JobID] = generate_job_id,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        self._auth_gate = auth_gate
        self._verifier = verifier
        self._builder = builder
        self._manager = manager
        self._id_factory = id_factory
        self._logger = logger

    async def admit(self, body: bytes | str) -> JobID:
        """Admit one request.

        Raises:
            AdmissionError: Any validation, token or preflight failure.
            RandomSourceError: If no job id can be generated (fatal).
        """
        request = parse_request(body)
        locator = extract_locator(request.locator)
        await self._auth_gate.verify(request.secret)

        credentials = Credentials(username=request.username, password=request.password)
        await self._verifier.verify(locator, credentials)

        command = self._builder.build(locator, credentials)
        job = Job(id=self._id_factory(), command=command)
        self._manager.submit(job)

        mode = "mirror" if locator.is_directory else "file"
        self._logger.info(
            f"Job {job.id.short} admitted: {mode} {locator.address}{locator.path or '/'}"
        )
        return job.id
