"""Custom exceptions for mirrorgate."""


class MirrorGateError(Exception):
    """Base exception for mirrorgate errors."""

    pass


class AdmissionError(MirrorGateError):
    """Base exception for errors reported back to the caller.

    Raised anywhere on the admission path (validation, authentication,
    preflight). The message is safe to return in an HTTP response.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidFormatError(AdmissionError):
    """Raised when the request body is not a well-formed transfer request."""

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        message = "Invalid request received"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MissingURLError(AdmissionError):
    """Raised when the request carries no locator."""

    def __init__(self) -> None:
        super().__init__("No URL specified in a request")


class InvalidURLError(AdmissionError):
    """Raised when the locator cannot be parsed into scheme, host and path."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid URL: {url}")


class ProtocolMismatchError(AdmissionError):
    """Raised when the locator uses a scheme other than ftp."""

    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(f"Unsupported protocol '{scheme}', only ftp is supported")


class TokenMismatchError(AdmissionError):
    """Raised when the caller's secret does not match the configured one."""

    def __init__(self) -> None:
        super().__init__("Secret token does not match")


class UnauthorizedError(AdmissionError):
    """Raised when the preflight login is rejected by the FTP server."""

    def __init__(self) -> None:
        super().__init__("Missing or invalid credentials")


class FTPConnectionError(AdmissionError):
    """Raised when the FTP server cannot be reached during preflight."""

    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(f"Unable to connect to FTP server at {host}")


class ExecutionError(MirrorGateError):
    """Raised when a job's command exits non-zero or cannot be spawned.

    Recovered by the worker: logged and never surfaced to a caller.
    """

    def __init__(
        self,
        job_id: str,
        returncode: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.job_id = job_id
        self.returncode = returncode
        self.reason = reason
        if returncode is not None:
            message = f"Job {job_id} exited with status {returncode}"
        else:
            message = f"Job {job_id} could not be started: {reason}"
        super().__init__(message)


class RandomSourceError(MirrorGateError):
    """Raised when the system random source cannot produce job identifiers.

    Treated as fatal: the process cannot give uniqueness guarantees.
    """

    pass


class ExecutableNotFoundError(MirrorGateError):
    """Raised at startup when the mirroring program is not on PATH."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name} not found on PATH")


class ManagerNotInitializedError(MirrorGateError):
    """Raised when jobs are submitted to a JobManager that was never opened."""

    pass


class WorkerAlreadyStartedError(MirrorGateError):
    """Raised when start() is called on a worker that is already running."""

    pass
