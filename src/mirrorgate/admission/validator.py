"""Request decoding and locator validation.

Both functions are pure: they either return a model or raise the
AdmissionError subclass that names exactly what was wrong.
"""

import re
from urllib.parse import unquote, urlsplit

from pydantic import ValidationError

from ..domain.exceptions import (
    InvalidFormatError,
    InvalidURLError,
    MissingURLError,
    ProtocolMismatchError,
)
from ..domain.requests import DEFAULT_FTP_PORT, Locator, TransferRequest

SUPPORTED_SCHEME = "ftp"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def parse_request(body: bytes | str) -> TransferRequest:
    """Decode a JSON request body into a TransferRequest.

    Raises:
        InvalidFormatError: If the body is not a JSON object with string fields.
    """
    try:
        return TransferRequest.model_validate_json(body)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.error_count() else None
        detail = first["msg"] if first else None
        raise InvalidFormatError(detail) from exc


def extract_locator(raw: str) -> Locator:
    """Parse and check the transfer target.

    Raises:
        MissingURLError: If ``raw`` is empty.
        InvalidURLError: If the URL cannot be parsed, names no host, or its
            decoded path contains control characters.
        ProtocolMismatchError: If the scheme is not ftp.
    """
    if not raw:
        raise MissingURLError()

    try:
        parts = urlsplit(raw)
        # Accessing .port validates it and raises on garbage or out-of-range.
        port = parts.port
    except ValueError as exc:
        raise InvalidURLError(raw) from exc

    if parts.scheme != SUPPORTED_SCHEME:
        raise ProtocolMismatchError(parts.scheme)

    if not parts.hostname:
        raise InvalidURLError(raw)

    # lftp takes the literal remote path, not its percent-encoded form.
    path = unquote(parts.path)
    if _CONTROL_CHARS.search(path):
        raise InvalidURLError(raw)

    return Locator(
        scheme=parts.scheme,
        host=parts.hostname,
        port=port if port is not None else DEFAULT_FTP_PORT,
        path=path,
    )
