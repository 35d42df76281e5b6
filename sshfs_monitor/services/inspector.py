"""Mount state inspection.

A mount point is classified in two steps: is it a registered mount
(`mountpoint -q`), and if so, can it be listed within a short bound (`ls`).
"""

import logging
from pathlib import Path

from sshfs_monitor.models import MountState
from sshfs_monitor.protocols import CommandRunner

logger = logging.getLogger(__name__)


class MountInspector:
    """Read-only classifier for local mount points.

    Safe to call repeatedly and concurrently for different mount points.
    """

    def __init__(self, runner: CommandRunner, timeout: float = 5.0) -> None:
        """Initialize inspector.

        Args:
            runner: Command runner for mountpoint and ls
            timeout: Bound for each check in seconds
        """
        self.runner = runner
        self.timeout = timeout

    async def is_mounted(self, mount_point: Path) -> bool:
        """Check whether the path is a registered mount."""
        result = await self.runner.run(["mountpoint", "-q", str(mount_point)], timeout=self.timeout)
        return result.ok

    async def is_accessible(self, mount_point: Path) -> bool:
        """Check whether listing the path succeeds within the bound."""
        result = await self.runner.run(["ls", str(mount_point)], timeout=self.timeout)
        if not result.ok:
            logger.debug("Mount point not accessible: %s - %s", mount_point, result.detail)
        return result.ok

    async def inspect(self, mount_point: Path) -> MountState:
        """Classify a mount point.

        Args:
            mount_point: Local mount point path

        Returns:
            ABSENT if not mounted, HEALTHY if mounted and listable,
            STALE if mounted but the listing fails or hangs.
        """
        if not await self.is_mounted(mount_point):
            return MountState.ABSENT
        if await self.is_accessible(mount_point):
            return MountState.HEALTHY
        return MountState.STALE

    async def is_broken_endpoint(self, mount_point: Path) -> bool:
        """Detect a point that is not registered but cannot be listed.

        A FUSE endpoint whose connection dropped can disappear from the
        mount table while the path still errors on access.
        """
        if not self._listed_in_parent(mount_point):
            return False
        return not await self.is_accessible(mount_point)

    @staticmethod
    def _listed_in_parent(mount_point: Path) -> bool:
        # stat() on a dead endpoint fails with ENOTCONN, so look it up by name
        try:
            return mount_point.name in {p.name for p in mount_point.parent.iterdir()}
        except OSError:
            return False
