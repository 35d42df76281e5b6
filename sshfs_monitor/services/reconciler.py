"""Host reconciliation engine.

Runs the per-host state machine for every configured host concurrently and
assembles one immutable CycleReport per cycle:

    probe: unreachable          -> skipped_unreachable
    probe: reachable            -> inspect
    inspect: healthy            -> already_mounted (+ enrichment)
    inspect: stale              -> recover (once) -> inspect
    inspect: absent             -> mount
    mount: success / failure    -> mounted (+ enrichment) / mount_failed

Each host task owns its result and builds it once, at the end. No error in
one host's task can reach another task or the caller.
"""

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from sshfs_monitor.errors import MountFailedError
from sshfs_monitor.models import (
    CycleReport,
    DiskUsage,
    HostEntry,
    HostResult,
    MountAction,
    MountState,
    ProbeOutcome,
    RemoteInfo,
)
from sshfs_monitor.protocols import RemoteInfoProvider
from sshfs_monitor.services.inspector import MountInspector
from sshfs_monitor.services.mounter import MountExecutor
from sshfs_monitor.services.probe import ReachabilityProbe
from sshfs_monitor.services.recovery import StaleEndpointRecovery

logger = logging.getLogger(__name__)


def _format_latency(probe: ProbeOutcome) -> str:
    if probe.latency_ms is None:
        return "N/A"
    return f"{probe.latency_ms:.3f}ms"


@dataclass
class _HostProgress:
    """What one host task has learned so far."""

    probe: ProbeOutcome | None = None
    initial_state: MountState | None = None
    command: str = ""
    duration: float = 0.0
    recovery_attempted: bool = False
    recovery_succeeded: bool = False
    trace: list[str] = field(default_factory=list)


class Reconciler:
    """Reconciles every configured host once per call to run_cycle()."""

    def __init__(
        self,
        probe: ReachabilityProbe,
        inspector: MountInspector,
        recovery: StaleEndpointRecovery,
        executor: MountExecutor,
        enricher: RemoteInfoProvider | None = None,
    ) -> None:
        """Initialize reconciler.

        Args:
            probe: Reachability probe
            inspector: Mount state inspector
            recovery: Stale endpoint recovery
            executor: Mount executor
            enricher: Optional remote info provider; None disables enrichment
        """
        self.probe = probe
        self.inspector = inspector
        self.recovery = recovery
        self.executor = executor
        self.enricher = enricher

    async def run_cycle(self, hosts: Sequence[HostEntry]) -> CycleReport:
        """Reconcile all hosts concurrently and wait for every one to finish.

        Args:
            hosts: Host registry, in order

        Returns:
            CycleReport with one HostResult per host, in registry order
        """
        started_at = datetime.now()
        start = time.perf_counter()

        results = await asyncio.gather(*(self._reconcile_isolated(host) for host in hosts))

        report = CycleReport(
            results=tuple(results),
            started_at=started_at,
            duration=time.perf_counter() - start,
        )
        logger.info(
            "Monitoring cycle complete: %d/%d hosts mounted (%.2fs)",
            report.mounted_count,
            report.total,
            report.duration,
        )
        return report

    async def _reconcile_isolated(self, host: HostEntry) -> HostResult:
        """Reconcile one host, converting any unexpected error into a result.

        Whatever the task learned before the error (probe outcome, initial
        state, recovery, the sshfs command) is kept in the failed result.
        """
        progress = _HostProgress()
        try:
            return await self.reconcile_host(host, progress)
        except Exception as e:
            logger.exception("Unexpected error reconciling %s", host.label)
            progress.trace.append(f"error: {type(e).__name__}: {e}")
            return HostResult(
                host=host,
                probe=progress.probe or ProbeOutcome(reachable=False, latency_ms=None, elapsed=0.0),
                action=MountAction.MOUNT_FAILED,
                initial_state=progress.initial_state,
                mount_duration=progress.duration,
                executed_command=progress.command,
                error=f"unexpected error: {e}",
                recovery_attempted=progress.recovery_attempted,
                recovery_succeeded=progress.recovery_succeeded,
                trace=tuple(progress.trace),
            )

    async def reconcile_host(
        self,
        host: HostEntry,
        progress: _HostProgress | None = None,
    ) -> HostResult:
        """Run the state machine for a single host.

        Args:
            host: Host to reconcile
            progress: Scratch record updated as each step completes

        Returns:
            Fully populated HostResult
        """
        p = progress if progress is not None else _HostProgress()
        trace = p.trace

        probe = await self.probe.probe(host)
        p.probe = probe
        if not probe.reachable:
            logger.info("Host %s not reachable", host.address)
            trace.append(f"probe: unreachable after {probe.elapsed:.3f}s")
            return HostResult(
                host=host,
                probe=probe,
                action=MountAction.SKIPPED_UNREACHABLE,
                trace=tuple(trace),
            )

        logger.info("Host %s reachable (ping: %s)", host.address, _format_latency(probe))
        trace.append(f"probe: reachable ({_format_latency(probe)})")

        mount_point = host.mount_point
        state = await self.inspector.inspect(mount_point)
        p.initial_state = state
        trace.append(f"inspect: {state.value}")

        broken = state is MountState.ABSENT and await self.inspector.is_broken_endpoint(mount_point)
        if state is MountState.STALE or broken:
            p.recovery_attempted = True
            outcome = await self.recovery.recover(mount_point, require_accessible=broken)
            p.recovery_succeeded = outcome.succeeded
            steps = ", ".join(outcome.attempted)
            if outcome.succeeded:
                trace.append(f"recovery: cleared stale endpoint ({steps})")
            else:
                logger.warning(
                    "Recovery incomplete for %s, attempting mount anyway",
                    mount_point,
                )
                trace.append(f"recovery: incomplete ({steps})")
            state = await self.inspector.inspect(mount_point)
            trace.append(f"inspect: {state.value}")

        error: str | None = None

        if state is MountState.HEALTHY:
            logger.info("Mount verified: %s", mount_point)
            action = MountAction.ALREADY_MOUNTED
        else:
            try:
                p.command, p.duration = await self.executor.mount(host)
                action = MountAction.MOUNTED
                trace.append(f"mount: ok in {p.duration:.3f}s")
            except MountFailedError as e:
                p.command, p.duration, error = e.command, e.duration, e.detail
                action = MountAction.MOUNT_FAILED
                trace.append(f"mount: failed ({e.detail})")

        remote_info = RemoteInfo.unavailable()
        disk_usage: DiskUsage | None = None
        if action is not MountAction.MOUNT_FAILED and self.enricher is not None:
            remote_info, disk_usage = await self._enrich(host, trace)

        return HostResult(
            host=host,
            probe=probe,
            action=action,
            initial_state=p.initial_state,
            mount_duration=p.duration,
            executed_command=p.command,
            error=error,
            recovery_attempted=p.recovery_attempted,
            recovery_succeeded=p.recovery_succeeded,
            trace=tuple(trace),
            remote_info=remote_info,
            disk_usage=disk_usage,
        )

    async def _enrich(
        self, host: HostEntry, trace: list[str]
    ) -> tuple[RemoteInfo, DiskUsage | None]:
        """Collect remote info and disk usage; errors degrade to N/A."""
        try:
            remote_info = await self.enricher.collect(host)
            disk_usage = await self.enricher.disk_usage(host.mount_point)
        except Exception as e:
            logger.warning("Enrichment failed for %s: %s", host.label, e)
            trace.append(f"enrich: unavailable ({type(e).__name__}: {e})")
            return RemoteInfo.unavailable(), None
        return remote_info, disk_usage
