"""Job identity generation."""

import secrets

from ..domain.exceptions import RandomSourceError
from ..domain.jobs import JOB_ID_BYTES, JobID


def generate_job_id() -> JobID:
    """Return a fresh 256-bit job id from the OS CSPRNG.

    Raises:
        RandomSourceError: If the random source is unavailable. Callers must
            treat this as fatal for the process, not for the request.
    """
    try:
        value = secrets.token_bytes(JOB_ID_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceError(f"System random source failed: {exc}") from exc
    return JobID(value)
