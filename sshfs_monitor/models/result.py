"""Per-host and per-cycle result models."""

from dataclasses import dataclass, field
from datetime import datetime

from sshfs_monitor.models.host import HostEntry
from sshfs_monitor.models.mount import MountAction, MountState, ProbeOutcome

UNAVAILABLE = "N/A"


@dataclass(frozen=True)
class RemoteInfo:
    """Best-effort metadata fetched from a mounted host."""

    hostname: str = UNAVAILABLE
    uptime: str = UNAVAILABLE
    mac: str = UNAVAILABLE

    @classmethod
    def unavailable(cls) -> "RemoteInfo":
        """Record with every field marked unavailable."""
        return cls()


@dataclass(frozen=True)
class DiskUsage:
    """Capacity of a mounted filesystem in bytes."""

    total: int
    used: int

    @property
    def percent(self) -> int:
        """Used space as a whole percentage."""
        if self.total <= 0:
            return 0
        return int(self.used * 100 / self.total)


@dataclass(frozen=True)
class HostResult:
    """Outcome of reconciling one host during one cycle."""

    host: HostEntry
    probe: ProbeOutcome
    action: MountAction
    initial_state: MountState | None = None
    mount_duration: float = 0.0
    executed_command: str = ""
    error: str | None = None
    recovery_attempted: bool = False
    recovery_succeeded: bool = False
    trace: tuple[str, ...] = ()
    remote_info: RemoteInfo = field(default_factory=RemoteInfo.unavailable)
    disk_usage: DiskUsage | None = None

    @property
    def reachable(self) -> bool:
        return self.probe.reachable

    @property
    def mounted(self) -> bool:
        """True when the host ended the cycle with a working mount."""
        return self.action in (MountAction.ALREADY_MOUNTED, MountAction.MOUNTED)


@dataclass(frozen=True)
class CycleReport:
    """Results of one reconciliation cycle, in registry order."""

    results: tuple[HostResult, ...]
    started_at: datetime
    duration: float

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def reachable_count(self) -> int:
        return sum(1 for r in self.results if r.reachable)

    @property
    def mounted_count(self) -> int:
        return sum(1 for r in self.results if r.mounted)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if r.action is MountAction.MOUNT_FAILED)

    @property
    def mount_success_rate(self) -> int:
        """Mounted hosts as a percentage of reachable hosts."""
        if not self.reachable_count:
            return 0
        return self.mounted_count * 100 // self.reachable_count

    @property
    def online_rate(self) -> int:
        """Reachable hosts as a percentage of all hosts."""
        if not self.total:
            return 0
        return self.reachable_count * 100 // self.total
