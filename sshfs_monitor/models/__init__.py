"""Data models for sshfs-monitor."""

from sshfs_monitor.models.command import CommandResult
from sshfs_monitor.models.host import HostEntry, PooledConnection
from sshfs_monitor.models.mount import (
    MountAction,
    MountState,
    ProbeOutcome,
    RecoveryOutcome,
)
from sshfs_monitor.models.result import (
    UNAVAILABLE,
    CycleReport,
    DiskUsage,
    HostResult,
    RemoteInfo,
)

__all__ = [
    "CommandResult",
    "CycleReport",
    "DiskUsage",
    "HostEntry",
    "HostResult",
    "MountAction",
    "MountState",
    "PooledConnection",
    "ProbeOutcome",
    "RecoveryOutcome",
    "RemoteInfo",
    "UNAVAILABLE",
]
