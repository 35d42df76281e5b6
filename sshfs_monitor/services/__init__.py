"""Services for sshfs-monitor."""

from sshfs_monitor.services.commands import SubprocessRunner
from sshfs_monitor.services.enrichment import RemoteInfoCollector
from sshfs_monitor.services.inspector import MountInspector
from sshfs_monitor.services.mounter import MOUNT_OPTIONS, MountExecutor, build_mount_command
from sshfs_monitor.services.pool import ConnectionPool
from sshfs_monitor.services.probe import ReachabilityProbe
from sshfs_monitor.services.reconciler import Reconciler
from sshfs_monitor.services.recovery import (
    DEFAULT_STRATEGIES,
    StaleEndpointRecovery,
    UnmountStrategy,
)
from sshfs_monitor.services.scheduler import CycleScheduler

__all__ = [
    "ConnectionPool",
    "CycleScheduler",
    "DEFAULT_STRATEGIES",
    "MOUNT_OPTIONS",
    "MountExecutor",
    "MountInspector",
    "ReachabilityProbe",
    "Reconciler",
    "RemoteInfoCollector",
    "StaleEndpointRecovery",
    "SubprocessRunner",
    "UnmountStrategy",
    "build_mount_command",
]
