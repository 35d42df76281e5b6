"""Dependency injection container for sshfs-monitor.

Builds the reconciliation engine from configuration in one place.
"""

from dataclasses import dataclass

from sshfs_monitor.config import Config
from sshfs_monitor.protocols import CommandRunner
from sshfs_monitor.services import (
    ConnectionPool,
    MountExecutor,
    MountInspector,
    ReachabilityProbe,
    Reconciler,
    RemoteInfoCollector,
    StaleEndpointRecovery,
    SubprocessRunner,
)


@dataclass
class Dependencies:
    """Container for sshfs-monitor dependencies.

    Example:
        deps = Dependencies.create()
        report = await deps.reconciler.run_cycle(deps.config.get_hosts())
        await deps.cleanup()
    """

    config: Config
    pool: ConnectionPool
    reconciler: Reconciler

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from the environment.

        Returns:
            Initialized Dependencies instance
        """
        return cls.from_config(Config.from_env())

    @classmethod
    def from_config(cls, config: Config, runner: CommandRunner | None = None) -> "Dependencies":
        """Create dependencies with custom configuration.

        Args:
            config: Config instance
            runner: Command runner override (defaults to SubprocessRunner)

        Returns:
            Dependencies with the engine wired from config
        """
        settings = config.settings
        runner = runner or SubprocessRunner()

        pool = ConnectionPool(
            idle_timeout=settings.idle_timeout,
            max_size=settings.max_pool_size,
            connect_timeout=settings.ssh_connect_timeout,
            known_hosts=settings.known_hosts,
        )
        inspector = MountInspector(runner, timeout=settings.inspect_timeout)
        reconciler = Reconciler(
            probe=ReachabilityProbe(
                runner,
                timeout=settings.probe_timeout,
                method=settings.probe_method,
            ),
            inspector=inspector,
            recovery=StaleEndpointRecovery(
                runner,
                inspector,
                settle_delay=settings.settle_delay,
                timeout=settings.unmount_timeout,
            ),
            executor=MountExecutor(runner, timeout=settings.mount_timeout),
            enricher=(
                RemoteInfoCollector(
                    pool,
                    command_timeout=settings.ssh_command_timeout,
                    disk_timeout=settings.inspect_timeout,
                )
                if settings.enrich
                else None
            ),
        )
        return cls(config=config, pool=pool, reconciler=reconciler)

    async def cleanup(self) -> None:
        """Clean up resources (close all SSH connections)."""
        await self.pool.close_all()
