"""Protocol interfaces for dependency inversion.

Defines the contracts the reconciliation engine depends on, so the
external-command and SSH layers can be replaced in tests.

Usage Example:

    from sshfs_monitor.protocols import CommandRunner

    class ScriptedRunner:
        async def run(self, argv, timeout):
            return CommandResult(output="", error="", returncode=0)

    inspector = MountInspector(runner=ScriptedRunner())
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from sshfs_monitor.models import CommandResult, DiskUsage, HostEntry, RemoteInfo


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for running local external commands.

    Implementations must never raise for a failing, missing, or hung
    command; those outcomes are encoded in the returned CommandResult.
    """

    async def run(self, argv: Sequence[str], timeout: float) -> CommandResult:
        """Run a command with a hard timeout.

        Args:
            argv: Program and arguments
            timeout: Seconds before the process is killed

        Returns:
            Command result with output, return code, and duration
        """
        ...


@runtime_checkable
class SSHConnectionPool(Protocol):
    """Protocol for SSH connection pooling."""

    async def get_connection(self, host: HostEntry) -> Any:
        """Get or create connection for host.

        Raises:
            OSError or asyncssh.Error: If unable to connect
        """
        ...

    async def remove_connection(self, host_key: str) -> None:
        """Remove connection from pool. Safe if absent."""
        ...

    async def close_all(self) -> None:
        """Close all connections in pool."""
        ...


@runtime_checkable
class RemoteInfoProvider(Protocol):
    """Protocol for best-effort enrichment of mounted hosts."""

    async def collect(self, host: HostEntry) -> RemoteInfo:
        """Fetch hostname, uptime, and MAC; never raises."""
        ...

    async def disk_usage(self, mount_point: Path) -> DiskUsage | None:
        """Read capacity of a mounted filesystem; None if unavailable."""
        ...


__all__ = [
    "CommandRunner",
    "RemoteInfoProvider",
    "SSHConnectionPool",
]
