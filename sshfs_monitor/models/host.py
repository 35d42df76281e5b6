"""Host-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import asyncssh

DEFAULT_PORT = 22
DEFAULT_USER = "root"
DEFAULT_REMOTE_DIR = "/root"


@dataclass(frozen=True)
class HostEntry:
    """One configured remote host and where to mount it."""

    address: str
    mount_point: Path
    user: str = DEFAULT_USER
    port: int = DEFAULT_PORT
    remote_dir: str = DEFAULT_REMOTE_DIR

    def __post_init__(self) -> None:
        if not self.address:
            raise ValueError("host address must not be empty")
        if not self.mount_point.is_absolute():
            raise ValueError(f"mount point must be absolute, got {self.mount_point}")

    @property
    def label(self) -> str:
        """Display label in user@address form."""
        return f"{self.user}@{self.address}"

    @property
    def key(self) -> str:
        """Unique connection key (user@address:port)."""
        return f"{self.user}@{self.address}:{self.port}"

    @property
    def remote_source(self) -> str:
        """SSHFS source argument, always ending in a slash."""
        return f"{self.user}@{self.address}:{self.remote_dir.rstrip('/')}/"


@dataclass
class PooledConnection:
    """A pooled SSH connection with last-used timestamp."""

    connection: "asyncssh.SSHClientConnection"
    last_used: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        """Update last-used timestamp."""
        self.last_used = datetime.now()

    @property
    def is_stale(self) -> bool:
        """Check if the underlying connection was closed."""
        return bool(self.connection.is_closed())
