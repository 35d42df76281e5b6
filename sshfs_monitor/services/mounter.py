"""SSHFS mount execution."""

import asyncio
import logging
import time
from pathlib import Path

from sshfs_monitor.errors import MountFailedError
from sshfs_monitor.models import HostEntry
from sshfs_monitor.protocols import CommandRunner
from sshfs_monitor.utils.blocking import run_bounded
from sshfs_monitor.utils.shell import format_command

logger = logging.getLogger(__name__)

# Disable attribute and entry caching so the mount reflects remote state immediately
MOUNT_OPTIONS = "cache=no,attr_timeout=0,entry_timeout=0"


def build_mount_command(host: HostEntry) -> list[str]:
    """Build the sshfs invocation for a host.

    The argument shape is a compatibility contract with the sshfs client:
    source, mount point, then a single -o with the fixed options and port.

    Args:
        host: Host to mount

    Returns:
        argv for sshfs
    """
    return [
        "sshfs",
        host.remote_source,
        str(host.mount_point),
        "-o",
        f"{MOUNT_OPTIONS},port={host.port}",
    ]


def _ensure_directory(path: Path) -> None:
    # exist_ok stats the path, which can hang on a stale FUSE root
    path.mkdir(parents=True, exist_ok=True)


class MountExecutor:
    """Attaches remote filesystems at their local mount points."""

    def __init__(self, runner: CommandRunner, timeout: float = 30.0) -> None:
        """Initialize executor.

        Args:
            runner: Command runner for sshfs
            timeout: Seconds before a hung sshfs is killed
        """
        self.runner = runner
        self.timeout = timeout

    async def mount(self, host: HostEntry) -> tuple[str, float]:
        """Mount a host's remote directory.

        The mount point directory is created if missing and is left in
        place whatever the outcome.

        Args:
            host: Host whose mount point is absent

        Returns:
            Tuple of (command string, duration in seconds)

        Raises:
            MountFailedError: If the directory cannot be created or sshfs fails
        """
        argv = build_mount_command(host)
        command = format_command(argv)

        try:
            await run_bounded(_ensure_directory, host.mount_point, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("Mount point %s did not respond within %.1fs", host.mount_point, self.timeout)
            raise MountFailedError(
                command, self.timeout, f"mount directory check timed out after {self.timeout:.0f}s"
            ) from e
        except OSError as e:
            logger.error("Cannot create mount point %s: %s", host.mount_point, e)
            raise MountFailedError(command, 0.0, f"failed to create mount directory: {e}") from e

        start = time.perf_counter()
        result = await self.runner.run(argv, timeout=self.timeout)
        duration = time.perf_counter() - start

        if not result.ok:
            logger.error(
                "Failed to mount: %s:%d (%.6fs): %s",
                host.address,
                host.port,
                duration,
                result.detail,
            )
            raise MountFailedError(command, duration, result.detail)

        logger.info(
            "Successfully mounted: %s:%d -> %s (%.6fs)",
            host.address,
            host.port,
            host.mount_point,
            duration,
        )
        return command, duration
