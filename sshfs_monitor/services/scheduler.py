"""Cycle scheduling with cooperative shutdown.

The stop event only gates the start of the next cycle. A cycle that is
already running always finishes its dispatched host tasks, so no mount is
abandoned half way.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from sshfs_monitor.errors import HostsFileError
from sshfs_monitor.models import CycleReport, HostEntry
from sshfs_monitor.services.reconciler import Reconciler

logger = logging.getLogger(__name__)

ReportCallback = Callable[[CycleReport], Awaitable[None] | None]


class CycleScheduler:
    """Repeats reconciliation cycles on a fixed interval."""

    def __init__(
        self,
        reconciler: Reconciler,
        load_hosts: Callable[[], Sequence[HostEntry]],
        interval: float,
        stop_event: asyncio.Event | None = None,
        on_report: ReportCallback | None = None,
    ) -> None:
        """Initialize scheduler.

        Args:
            reconciler: Engine that runs one cycle
            load_hosts: Returns the current registry; called before every cycle
            interval: Seconds to sleep after each report
            stop_event: Cancellation token; set it to stop after the current cycle
            on_report: Called with every cycle's report
        """
        self.reconciler = reconciler
        self.load_hosts = load_hosts
        self.interval = interval
        self.stop_event = stop_event or asyncio.Event()
        self.on_report = on_report
        self.cycles_run = 0

    def stop(self) -> None:
        """Request shutdown after the in-flight cycle completes."""
        self.stop_event.set()

    async def run_once(self) -> CycleReport:
        """Load the registry and run a single cycle."""
        hosts = list(self.load_hosts())
        report = await self.reconciler.run_cycle(hosts)
        self.cycles_run += 1

        if self.on_report is not None:
            outcome = self.on_report(report)
            if asyncio.iscoroutine(outcome):
                await outcome
        return report

    async def run_forever(self) -> None:
        """Run cycles until the stop event is set.

        A failing hosts reload skips that cycle instead of ending the loop.
        """
        logger.info("Scheduler started (interval=%ss)", self.interval)
        while not self.stop_event.is_set():
            try:
                await self.run_once()
            except HostsFileError as e:
                logger.error("Skipping cycle: %s", e)

            if await self._wait_interval():
                break
        logger.info("Scheduler stopped after %d cycle(s)", self.cycles_run)

    async def _wait_interval(self) -> bool:
        """Sleep for the interval, waking early on stop.

        Returns:
            True if the stop event was set
        """
        try:
            await asyncio.wait_for(self.stop_event.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            return False
        return True
