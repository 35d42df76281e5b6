"""Mount state and reconciliation outcome models."""

from dataclasses import dataclass
from enum import Enum


class MountState(str, Enum):
    """Classification of a local mount point."""

    ABSENT = "absent"
    HEALTHY = "healthy"
    STALE = "stale"


class MountAction(str, Enum):
    """Terminal action taken for a host in one cycle."""

    ALREADY_MOUNTED = "already_mounted"
    MOUNTED = "mounted"
    MOUNT_FAILED = "mount_failed"
    SKIPPED_UNREACHABLE = "skipped_unreachable"


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of a single reachability probe.

    latency_ms is the round trip reported by the probe itself, or None when
    it could not be determined. elapsed is the probe's wall-clock cost.
    """

    reachable: bool
    latency_ms: float | None
    elapsed: float


@dataclass(frozen=True)
class RecoveryOutcome:
    """Result of one stale endpoint recovery attempt."""

    succeeded: bool
    attempted: tuple[str, ...]
    final_state: MountState
