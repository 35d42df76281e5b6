"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

PROBE_METHODS = ("icmp", "tcp")


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Registry
    hosts_file: str = field(default="./sshfs_hosts.txt")
    mount_base: str = field(default="/root")

    # Probe / inspection / mount timeouts (seconds)
    probe_timeout: int = field(default=3)
    probe_method: str = field(default="icmp")
    inspect_timeout: float = field(default=5.0)
    unmount_timeout: float = field(default=10.0)
    mount_timeout: float = field(default=30.0)
    settle_delay: float = field(default=1.0)

    # Scheduling
    check_interval: int = field(default=30)
    watch_interval: int = field(default=3)

    # Enrichment over SSH
    enrich: bool = field(default=True)
    ssh_connect_timeout: float = field(default=2.0)
    ssh_command_timeout: float = field(default=5.0)
    known_hosts: str | None = field(default=None)
    idle_timeout: int = field(default=60)
    max_pool_size: int = field(default=100)

    # Daemon
    log_file: str = field(default="/var/log/sshfs-monitor.log")
    pid_file: str = field(default="/var/run/sshfs-monitor.pid")

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SSHFS_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            hosts_file=os.getenv("SSHFS_HOSTS_FILE", "./sshfs_hosts.txt"),
            mount_base=os.getenv("SSHFS_MOUNT_BASE", "/root"),
            probe_timeout=cls._get_int("SSHFS_PROBE_TIMEOUT", 3),
            probe_method=cls._get_probe_method(),
            inspect_timeout=cls._get_float("SSHFS_INSPECT_TIMEOUT", 5.0),
            unmount_timeout=cls._get_float("SSHFS_UNMOUNT_TIMEOUT", 10.0),
            mount_timeout=cls._get_float("SSHFS_MOUNT_TIMEOUT", 30.0),
            settle_delay=cls._get_float("SSHFS_SETTLE_DELAY", 1.0),
            check_interval=cls._get_int("SSHFS_CHECK_INTERVAL", 30),
            watch_interval=cls._get_int("SSHFS_WATCH_INTERVAL", 3),
            enrich=cls._get_bool("SSHFS_ENRICH", True),
            ssh_connect_timeout=cls._get_float("SSHFS_SSH_CONNECT_TIMEOUT", 2.0),
            ssh_command_timeout=cls._get_float("SSHFS_SSH_COMMAND_TIMEOUT", 5.0),
            known_hosts=os.getenv("SSHFS_KNOWN_HOSTS") or None,
            idle_timeout=cls._get_int("SSHFS_IDLE_TIMEOUT", 60),
            max_pool_size=cls._get_int("SSHFS_MAX_POOL_SIZE", 100),
            log_file=os.getenv("SSHFS_LOG_FILE", "/var/log/sshfs-monitor.log"),
            pid_file=os.getenv("SSHFS_PID_FILE", "/var/run/sshfs-monitor.pid"),
            log_level=os.getenv("SSHFS_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("SSHFS_LOG_COLORS", True),
        )

    @property
    def cycle_timeout(self) -> float:
        """Worst-case seconds one host can spend in a single cycle.

        Every external step has its own bound, so their sum bounds a host:
        probe, classification plus the broken-endpoint listing, up to three
        unmount attempts with settle and re-inspection, a final inspection,
        the directory check and sshfs, then enrichment.
        """
        inspect = 2 * self.inspect_timeout
        recovery = 3 * (self.unmount_timeout + self.settle_delay + inspect + self.inspect_timeout)
        mount = 2 * self.mount_timeout
        enrichment = self.ssh_connect_timeout + 3 * self.ssh_command_timeout + self.inspect_timeout
        return (
            self.probe_timeout
            + inspect
            + self.inspect_timeout
            + recovery
            + inspect
            + mount
            + enrichment
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Get float from environment, falling back on invalid input."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float for %s: %s, using default %s", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_probe_method() -> str:
        """Get probe method with validation.

        Returns:
            Probe method ("icmp" or "tcp")
        """
        method = os.getenv("SSHFS_PROBE_METHOD", "").lower()
        if method in PROBE_METHODS:
            return method
        if method:
            logger.warning("Unknown probe method %s, using icmp", method)
        return "icmp"
