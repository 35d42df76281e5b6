"""Best-effort enrichment of mounted hosts.

Remote hostname, uptime, and MAC address are fetched over a pooled SSH
connection. Every field fails independently to "N/A"; nothing here can
change a host's mount outcome.
"""

import asyncio
import logging
import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import asyncssh

from sshfs_monitor.errors import EnrichmentUnavailableError
from sshfs_monitor.models import UNAVAILABLE, DiskUsage, HostEntry, RemoteInfo
from sshfs_monitor.utils.blocking import run_bounded

if TYPE_CHECKING:
    from sshfs_monitor.protocols import SSHConnectionPool

logger = logging.getLogger(__name__)

_UPTIME = re.compile(r"up\s+([^,]*)")
_MAC = re.compile(r"(?:[0-9a-f]{2}:){5}[0-9a-f]{2}", re.IGNORECASE)

HOSTNAME_COMMAND = "hostname"
UPTIME_COMMAND = "uptime"
MAC_COMMAND = "cat /sys/class/net/eth0/address 2>/dev/null || ip link show eth0 2>/dev/null"


def parse_uptime(output: str) -> str | None:
    """Extract the "up ..." duration from uptime output."""
    match = _UPTIME.search(output)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def parse_mac(output: str) -> str | None:
    """Extract the first hardware address from command output."""
    match = _MAC.search(output)
    return match.group(0).lower() if match else None


def parse_hostname(output: str) -> str | None:
    value = output.strip()
    return value or None


class RemoteInfoCollector:
    """Collects remote metadata and local disk usage for mounted hosts."""

    def __init__(
        self,
        pool: "SSHConnectionPool",
        command_timeout: float = 5.0,
        disk_timeout: float = 5.0,
    ) -> None:
        """Initialize collector.

        Args:
            pool: SSH connection pool
            command_timeout: Seconds allowed per remote command
            disk_timeout: Seconds allowed for the local statvfs call
        """
        self.pool = pool
        self.command_timeout = command_timeout
        self.disk_timeout = disk_timeout

    async def collect(self, host: HostEntry) -> RemoteInfo:
        """Fetch hostname, uptime, and MAC address.

        Args:
            host: Host that is confirmed mounted

        Returns:
            RemoteInfo with "N/A" for every field that could not be read
        """
        try:
            conn = await self.pool.get_connection(host)
        except (OSError, asyncssh.Error, asyncio.TimeoutError) as e:
            logger.debug("Enrichment connection to %s failed: %s", host.key, e)
            await self.pool.remove_connection(host.key)
            return RemoteInfo.unavailable()

        fields = {
            "hostname": (HOSTNAME_COMMAND, parse_hostname),
            "uptime": (UPTIME_COMMAND, parse_uptime),
            "mac": (MAC_COMMAND, parse_mac),
        }
        values: dict[str, str] = {}
        for name, (command, parse) in fields.items():
            try:
                values[name] = await self._query(conn, name, command, parse)
            except EnrichmentUnavailableError as e:
                logger.debug("%s: %s", host.label, e)
                values[name] = UNAVAILABLE

        if all(v == UNAVAILABLE for v in values.values()):
            # Likely a dead connection; force a fresh handshake next cycle
            await self.pool.remove_connection(host.key)

        return RemoteInfo(**values)

    async def _query(
        self,
        conn: asyncssh.SSHClientConnection,
        field: str,
        command: str,
        parse: Callable[[str], str | None],
    ) -> str:
        """Run one remote command and parse its output.

        Raises:
            EnrichmentUnavailableError: If the command fails or yields nothing
        """
        try:
            result = await asyncio.wait_for(
                conn.run(command, check=False),
                timeout=self.command_timeout,
            )
        except asyncio.TimeoutError as e:
            raise EnrichmentUnavailableError(field, "timed out") from e
        except (OSError, asyncssh.Error) as e:
            raise EnrichmentUnavailableError(field, str(e)) from e

        if result.exit_status not in (0, None):
            raise EnrichmentUnavailableError(field, f"exit status {result.exit_status}")

        stdout = result.stdout
        if isinstance(stdout, bytes):
            stdout = stdout.decode("utf-8", errors="replace")
        value = parse(stdout or "")
        if value is None:
            raise EnrichmentUnavailableError(field, "empty output")
        return value

    async def disk_usage(self, mount_point: Path) -> DiskUsage | None:
        """Read capacity of a mounted filesystem.

        Runs statvfs in a daemon thread so a wedged mount cannot block the
        event loop or process exit.

        Returns:
            DiskUsage, or None if the call fails or times out
        """
        try:
            st = await run_bounded(os.statvfs, mount_point, timeout=self.disk_timeout)
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug("Disk usage unavailable for %s: %s", mount_point, e)
            return None

        total = st.f_blocks * st.f_frsize
        used = (st.f_blocks - st.f_bfree) * st.f_frsize
        return DiskUsage(total=total, used=used)
