"""Presentation of cycle reports."""

from sshfs_monitor.report.dashboard import DashboardRenderer, LocalInfo
from sshfs_monitor.report.stats import human_size, mount_status, render_stats

__all__ = [
    "DashboardRenderer",
    "LocalInfo",
    "human_size",
    "mount_status",
    "render_stats",
]
