"""Exceptions raised by sshfs-monitor components."""


class SSHFSMonitorError(Exception):
    """Base class for sshfs-monitor errors."""


class HostsFileError(SSHFSMonitorError):
    """Hosts file is missing, unreadable, or defines no hosts."""

    def __init__(self, path: str, reason: str):
        """Initialize hosts file error.

        Args:
            path: Path of the hosts file
            reason: Human readable reason
        """
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class MountFailedError(SSHFSMonitorError):
    """The sshfs attach command did not succeed.

    Carries the literal command and its duration so the failure can be
    reported without losing diagnostics.
    """

    def __init__(self, command: str, duration: float, detail: str):
        """Initialize mount failure.

        Args:
            command: Command string that was issued
            duration: Wall-clock seconds the attempt took
            detail: Verbatim error output or reason
        """
        self.command = command
        self.duration = duration
        self.detail = detail
        super().__init__(f"failed to mount: {detail}")


class EnrichmentUnavailableError(SSHFSMonitorError):
    """A remote metadata field could not be fetched."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field} unavailable: {reason}")


class DaemonAlreadyRunningError(SSHFSMonitorError):
    """Another monitor instance holds the PID file."""

    def __init__(self, pid: int):
        self.pid = pid
        super().__init__(f"SSHFS monitor already running (PID: {pid})")
