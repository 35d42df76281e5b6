"""Stale endpoint recovery.

Forces a stuck mount point back to absent by trying unmount strategies in
escalating order. Each attempt is followed by a settle delay and a fresh
inspection; the first verified release stops the sequence.

Mount point directories are never removed here: they may hold user data from
an earlier session.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from sshfs_monitor.models import MountState, RecoveryOutcome
from sshfs_monitor.protocols import CommandRunner
from sshfs_monitor.services.inspector import MountInspector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnmountStrategy:
    """One way of releasing a mount point."""

    name: str
    argv: tuple[str, ...]

    def command(self, mount_point: Path) -> list[str]:
        return [*self.argv, str(mount_point)]


DEFAULT_STRATEGIES: tuple[UnmountStrategy, ...] = (
    UnmountStrategy("graceful", ("fusermount", "-u")),
    UnmountStrategy("forced", ("umount", "-f")),
    UnmountStrategy("lazy", ("umount", "-l")),
)


class StaleEndpointRecovery:
    """Escalating graceful -> forced -> lazy unmount with verification."""

    def __init__(
        self,
        runner: CommandRunner,
        inspector: MountInspector,
        settle_delay: float = 1.0,
        timeout: float = 10.0,
        strategies: tuple[UnmountStrategy, ...] = DEFAULT_STRATEGIES,
    ) -> None:
        """Initialize recovery.

        Args:
            runner: Command runner for the unmount commands
            inspector: Inspector used to verify each attempt
            settle_delay: Seconds to wait after each attempt before re-inspecting
            timeout: Bound for each unmount command in seconds
            strategies: Ordered strategies to try
        """
        self.runner = runner
        self.inspector = inspector
        self.settle_delay = settle_delay
        self.timeout = timeout
        self.strategies = strategies

    async def recover(
        self,
        mount_point: Path,
        require_accessible: bool = False,
    ) -> RecoveryOutcome:
        """Try to release a stale mount point.

        Args:
            mount_point: Stale or inaccessible mount point
            require_accessible: Also demand a successful listing before an
                attempt counts as a release. Used for broken endpoints that
                were already absent from the mount table.

        Returns:
            RecoveryOutcome naming every strategy attempted. A failed
            recovery is not an error; the caller proceeds to mount anyway.
        """
        logger.info("Detected stale SSHFS endpoint at %s, clearing...", mount_point)
        attempted: list[str] = []
        state = MountState.STALE

        for strategy in self.strategies:
            attempted.append(strategy.name)
            result = await self.runner.run(strategy.command(mount_point), timeout=self.timeout)
            if result.ok:
                logger.debug("%s unmount of %s returned success", strategy.name, mount_point)
            else:
                logger.debug("%s unmount of %s failed: %s", strategy.name, mount_point, result.detail)

            await asyncio.sleep(self.settle_delay)

            state = await self.inspector.inspect(mount_point)
            if state is MountState.ABSENT and (
                not require_accessible or await self.inspector.is_accessible(mount_point)
            ):
                logger.info(
                    "Successfully cleared stale endpoint: %s (%s)",
                    mount_point,
                    strategy.name,
                )
                return RecoveryOutcome(succeeded=True, attempted=tuple(attempted), final_state=state)

        logger.warning("Could not fully clear stale endpoint: %s", mount_point)
        return RecoveryOutcome(succeeded=False, attempted=tuple(attempted), final_state=state)
