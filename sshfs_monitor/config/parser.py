"""Hosts file parser.

Reads the sshfs hosts file and builds the ordered host registry.

Line format (whitespace separated, `#` comments and blank lines ignored):

    [user@]address [mount_point] [port] [remote_dir]
"""

import logging
from pathlib import Path

from sshfs_monitor.errors import HostsFileError
from sshfs_monitor.models import HostEntry
from sshfs_monitor.models.host import DEFAULT_PORT, DEFAULT_REMOTE_DIR, DEFAULT_USER

logger = logging.getLogger(__name__)


class HostsFileParser:
    """Parser for sshfs hosts files.

    Resolves relative mount points under the mount base and fills in
    defaults for every optional field.
    """

    def __init__(
        self,
        hosts_file: Path | str = "./sshfs_hosts.txt",
        mount_base: Path | str = "/root",
    ):
        """Initialize hosts file parser.

        Args:
            hosts_file: Path to the hosts file
            mount_base: Base directory for relative and default mount points
        """
        self.hosts_file = Path(hosts_file)
        self.mount_base = Path(mount_base).expanduser().absolute()

    def parse(self) -> list[HostEntry]:
        """Parse the hosts file into an ordered registry.

        Returns:
            Host entries in file order

        Raises:
            HostsFileError: If the file is missing, unreadable, or empty
        """
        if not self.hosts_file.exists():
            raise HostsFileError(str(self.hosts_file), "Hosts file not found")

        try:
            content = self.hosts_file.read_text()
        except OSError as e:
            raise HostsFileError(str(self.hosts_file), f"Cannot read hosts file ({e})") from e

        hosts = self.parse_lines(content.splitlines())
        if not hosts:
            raise HostsFileError(str(self.hosts_file), "No hosts found in")

        logger.debug("Parsed %d hosts from %s", len(hosts), self.hosts_file)
        return hosts

    def parse_lines(self, lines: list[str]) -> list[HostEntry]:
        """Parse hosts file lines.

        Args:
            lines: Raw lines of the hosts file

        Returns:
            Host entries in line order
        """
        hosts: list[HostEntry] = []
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            fields = line.split()
            user, address = self._split_user(fields[0])
            if not address:
                logger.warning("Skipping hosts line without address: %s", line)
                continue

            ordinal = len(hosts) + 1
            mount_point = self._resolve_mount_point(
                fields[1] if len(fields) > 1 else None, ordinal
            )
            port = self._parse_port(fields[2] if len(fields) > 2 else None)
            remote_dir = fields[3] if len(fields) > 3 else DEFAULT_REMOTE_DIR

            hosts.append(
                HostEntry(
                    address=address,
                    mount_point=mount_point,
                    user=user,
                    port=port,
                    remote_dir=remote_dir,
                )
            )
        return hosts

    @staticmethod
    def _split_user(target: str) -> tuple[str, str]:
        """Split an optional user@ prefix from the address."""
        if "@" in target:
            user, address = target.split("@", 1)
            return (user or DEFAULT_USER), address
        return DEFAULT_USER, target

    def _resolve_mount_point(self, value: str | None, ordinal: int) -> Path:
        """Resolve a mount point, defaulting by position in the file.

        The first host mounts at <base>/sshfs, the N-th at <base>/sshfsN.
        """
        if not value:
            name = "sshfs" if ordinal == 1 else f"sshfs{ordinal}"
            return self.mount_base / name

        path = Path(value)
        if not path.is_absolute():
            path = self.mount_base / path
        return path

    @staticmethod
    def _parse_port(value: str | None) -> int:
        if value is None or not value.isdigit():
            if value is not None:
                logger.warning("Invalid port %s, using %d", value, DEFAULT_PORT)
            return DEFAULT_PORT
        return int(value)
