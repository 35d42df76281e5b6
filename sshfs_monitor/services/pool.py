"""SSH connection pool for enrichment.

Connections are kept between cycles so a daemon does not re-handshake with
every mounted host every interval. Entries are keyed by HostEntry.key.

- One asyncio.Lock per host key serializes connect/replace/remove for that
  host; different hosts never wait on each other.
- The OrderedDict doubles as the LRU list: the first entry is evicted when
  the pool is full.
- Idle and closed connections are swept lazily at the start of every
  get_connection() call instead of by a background task.
"""

import asyncio
import logging
from collections import OrderedDict, defaultdict
from datetime import datetime, timedelta

import asyncssh

from sshfs_monitor.models import HostEntry, PooledConnection

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Bounded, LRU-evicting pool of asyncssh client connections."""

    def __init__(
        self,
        idle_timeout: int = 60,
        max_size: int = 100,
        connect_timeout: float = 2.0,
        known_hosts: str | None = None,
    ) -> None:
        """Initialize pool.

        Args:
            idle_timeout: Seconds a connection may sit unused before it is closed
            max_size: Maximum number of open connections (must be > 0)
            connect_timeout: Seconds allowed for the SSH handshake
            known_hosts: Path to known_hosts file, or None to skip host key checks

        Raises:
            ValueError: If max_size is not positive
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be > 0, got {max_size}")

        self.idle_timeout = idle_timeout
        self.max_size = max_size
        self.connect_timeout = connect_timeout
        self._known_hosts = known_hosts
        self._connections: OrderedDict[str, PooledConnection] = OrderedDict()
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

        if known_hosts is None:
            logger.debug("SSH host key verification disabled for enrichment connections")

    async def get_connection(self, host: HostEntry) -> asyncssh.SSHClientConnection:
        """Return a live connection to the host, opening one if needed.

        Raises:
            OSError, asyncssh.Error, asyncio.TimeoutError: If the handshake fails
        """
        self._sweep_idle()

        async with self._locks[host.key]:
            pooled = self._connections.get(host.key)
            if pooled is not None and not pooled.is_stale:
                pooled.touch()
                self._connections.move_to_end(host.key)
                return pooled.connection

            if pooled is not None:
                logger.info("Connection to %s closed, reconnecting", host.key)
                del self._connections[host.key]

            self._make_room()

            logger.debug("Opening SSH connection to %s", host.key)
            conn = await asyncssh.connect(
                host.address,
                port=host.port,
                username=host.user,
                known_hosts=self._known_hosts,
                connect_timeout=self.connect_timeout,
            )
            self._connections[host.key] = PooledConnection(connection=conn)
            logger.debug(
                "SSH connection established to %s (pool_size=%d/%d)",
                host.key,
                len(self._connections),
                self.max_size,
            )
            return conn

    def _make_room(self) -> None:
        """Evict least recently used connections until one slot is free."""
        while len(self._connections) >= self.max_size:
            key, pooled = self._connections.popitem(last=False)
            logger.info("Pool full (%d), evicting LRU connection %s", self.max_size, key)
            pooled.connection.close()
            self._prune_lock(key)

    def _sweep_idle(self) -> None:
        cutoff = datetime.now() - timedelta(seconds=self.idle_timeout)
        expired = [
            key
            for key, pooled in self._connections.items()
            if pooled.is_stale or pooled.last_used < cutoff
        ]
        for key in expired:
            if self._locks[key].locked():
                continue
            pooled = self._connections.pop(key)
            logger.debug("Closing idle connection to %s", key)
            pooled.connection.close()
            self._prune_lock(key)

    async def remove_connection(self, host_key: str) -> None:
        """Close and forget one connection. Safe if absent."""
        async with self._locks[host_key]:
            pooled = self._connections.pop(host_key, None)
            if pooled is not None:
                logger.debug("Removing connection to %s", host_key)
                pooled.connection.close()
        self._prune_lock(host_key)

    def _prune_lock(self, key: str) -> None:
        """Forget the lock of a host that no longer has a connection."""
        lock = self._locks.get(key)
        if lock is not None and not lock.locked() and key not in self._connections:
            del self._locks[key]

    async def close_all(self) -> None:
        """Close every pooled connection."""
        keys = list(self._connections)
        if keys:
            logger.info("Closing all %d connection(s)", len(keys))
        for key in keys:
            await self.remove_connection(key)

    @property
    def pool_size(self) -> int:
        return len(self._connections)

    @property
    def active_hosts(self) -> list[str]:
        """Connection keys in least-to-most recently used order."""
        return list(self._connections)
