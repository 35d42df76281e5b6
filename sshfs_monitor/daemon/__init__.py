"""Daemon process lifecycle helpers."""

from sshfs_monitor.daemon.pidfile import PidFile, StopResult, is_process_running

__all__ = ["PidFile", "StopResult", "is_process_running"]
