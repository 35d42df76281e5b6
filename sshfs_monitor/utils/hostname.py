"""Local machine identity for the dashboard header."""

import logging
import socket
from pathlib import Path

from sshfs_monitor.models import UNAVAILABLE

logger = logging.getLogger(__name__)

PROC_UPTIME = Path("/proc/uptime")
NET_CLASS = Path("/sys/class/net")


def get_server_hostname() -> str:
    """Get the hostname of the machine running the monitor."""
    return socket.gethostname() or UNAVAILABLE


def format_uptime(seconds: float) -> str:
    """Render an uptime the way `uptime` prints its "up" field.

    Examples: "3 days", "4:05", "12 min".
    """
    total_minutes = int(seconds // 60)
    days, rem = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(rem, 60)
    if days:
        return f"{days} day" if days == 1 else f"{days} days"
    if hours:
        return f"{hours}:{minutes:02d}"
    return f"{minutes} min"


def get_local_uptime(proc_uptime: Path = PROC_UPTIME) -> str:
    """Read local uptime from /proc, or "N/A"."""
    try:
        seconds = float(proc_uptime.read_text().split()[0])
    except (OSError, ValueError, IndexError) as e:
        logger.debug("Local uptime unavailable: %s", e)
        return UNAVAILABLE
    return format_uptime(seconds)


def get_local_mac(interface: str = "eth0", net_class: Path = NET_CLASS) -> str:
    """Read the hardware address of a local interface, or "N/A"."""
    try:
        value = (net_class / interface / "address").read_text().strip()
    except OSError:
        return UNAVAILABLE
    return value or UNAVAILABLE
