"""Application configuration.

Delegates to specialized components:
- HostsFileParser: Reads the sshfs hosts file
- Settings: Environment variables
"""

import logging
from dataclasses import dataclass, field

from sshfs_monitor.config.parser import HostsFileParser
from sshfs_monitor.config.settings import Settings
from sshfs_monitor.errors import HostsFileError
from sshfs_monitor.models import HostEntry

logger = logging.getLogger(__name__)

# Slack on top of the cycle bound for cleanup and log flushing
STOP_MARGIN = 5.0


@dataclass
class Config:
    """Application configuration.

    Aggregates environment settings and the hosts file registry.
    """

    settings: Settings
    parser: HostsFileParser
    _hosts_cache: list[HostEntry] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        Returns:
            Configured instance with all components initialized
        """
        settings = Settings.from_env()
        parser = HostsFileParser(
            hosts_file=settings.hosts_file,
            mount_base=settings.mount_base,
        )
        return cls(settings=settings, parser=parser)

    def get_hosts(self) -> list[HostEntry]:
        """Get the host registry.

        Lazy loads and caches hosts on first call.

        Returns:
            Host entries in file order

        Raises:
            HostsFileError: If the hosts file cannot be loaded
        """
        if not self._hosts_cache:
            self._hosts_cache = self.parser.parse()
        return list(self._hosts_cache)

    def reload_hosts(self) -> list[HostEntry]:
        """Re-read the hosts file, keeping the previous registry on failure.

        Returns:
            Fresh host entries, or the cached ones if the reload failed

        Raises:
            HostsFileError: If the reload failed and nothing is cached
        """
        try:
            self._hosts_cache = self.parser.parse()
        except HostsFileError as e:
            if not self._hosts_cache:
                raise
            logger.error("Hosts reload failed (%s), keeping %d cached hosts", e, len(self._hosts_cache))
        return list(self._hosts_cache)

    # Delegate to settings for convenience
    @property
    def hosts_file(self) -> str:
        """Path to the hosts file."""
        return self.settings.hosts_file

    @property
    def check_interval(self) -> int:
        """Daemon cycle interval in seconds."""
        return self.settings.check_interval

    @property
    def watch_interval(self) -> int:
        """Dashboard refresh interval in seconds."""
        return self.settings.watch_interval

    @property
    def log_file(self) -> str:
        return self.settings.log_file

    @property
    def pid_file(self) -> str:
        return self.settings.pid_file

    @property
    def stop_grace(self) -> float:
        """Seconds `stop` waits for the in-flight cycle before SIGKILL."""
        return self.settings.cycle_timeout + STOP_MARGIN
