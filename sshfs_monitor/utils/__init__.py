"""Utilities for sshfs-monitor."""

from sshfs_monitor.utils.blocking import run_bounded
from sshfs_monitor.utils.console import ColorfulFormatter, MonitorFormatter, PlainFileFormatter
from sshfs_monitor.utils.hostname import (
    format_uptime,
    get_local_mac,
    get_local_uptime,
    get_server_hostname,
)
from sshfs_monitor.utils.ping import check_host_online, parse_ping_latency, ping_command
from sshfs_monitor.utils.shell import format_command, quote_arg

__all__ = [
    "check_host_online",
    "ColorfulFormatter",
    "format_command",
    "format_uptime",
    "get_local_mac",
    "get_local_uptime",
    "get_server_hostname",
    "MonitorFormatter",
    "parse_ping_latency",
    "ping_command",
    "PlainFileFormatter",
    "quote_arg",
    "run_bounded",
]
