"""Inbound transfer request models."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_FTP_PORT = 21


class TransferRequest(BaseModel):
    """A single request to mirror an FTP directory or fetch a file.

    Transient: built per HTTP call and never stored. The locator travels
    as ``path`` on the wire.
    """

    locator: str = Field(default="", alias="path", description="ftp:// URL")
    username: str = Field(default="", description="FTP username")
    password: str = Field(default="", description="FTP password")
    secret: str = Field(default="", description="Shared secret token")


class Credentials(BaseModel):
    """FTP login identity supplied with a request.

    Treated as anonymous unless both username and password are present, so
    the preflight login and the transfer command always use the same
    identity.
    """

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = ""

    @property
    def is_anonymous(self) -> bool:
        return not (self.username and self.password)


class Locator(BaseModel):
    """Parsed transfer target."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    host: str
    port: int = DEFAULT_FTP_PORT
    path: str = ""

    @property
    def is_directory(self) -> bool:
        """Empty paths (root) and paths ending in a separator are directories."""
        return self.path == "" or self.path.endswith("/")

    @property
    def address(self) -> str:
        """``scheme://host:port`` with IPv6 hosts bracketed."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}"
