"""Reachability probe.

One bounded liveness check per host per cycle. A timeout means the host is
unreachable; it is never raised as an error.
"""

import logging
import time

from sshfs_monitor.models import HostEntry, ProbeOutcome
from sshfs_monitor.protocols import CommandRunner
from sshfs_monitor.utils.ping import check_host_online, parse_ping_latency, ping_command

logger = logging.getLogger(__name__)

# Grace on top of ping's own -W so the runner never kills a reply in flight
_PING_GRACE = 1.0


class ReachabilityProbe:
    """Checks whether hosts answer before anything expensive runs.

    Supports two methods:
    - icmp: one `ping -c 1`, latency parsed from the same reply
    - tcp: one TCP connect to the host's SSH port, latency is connect time
    """

    def __init__(
        self,
        runner: CommandRunner,
        timeout: int = 3,
        method: str = "icmp",
    ) -> None:
        """Initialize probe.

        Args:
            runner: Command runner used for ping
            timeout: Seconds before the host is declared unreachable
            method: "icmp" or "tcp"
        """
        if method not in ("icmp", "tcp"):
            raise ValueError(f"unknown probe method: {method}")
        self.runner = runner
        self.timeout = timeout
        self.method = method

    async def probe(self, host: HostEntry) -> ProbeOutcome:
        """Probe a host exactly once.

        Args:
            host: Host to check

        Returns:
            ProbeOutcome with reachability, latency (or None), and cost.
        """
        start = time.perf_counter()
        if self.method == "tcp":
            reachable = await check_host_online(host.address, host.port, timeout=self.timeout)
            elapsed = time.perf_counter() - start
            latency = elapsed * 1000 if reachable else None
        else:
            result = await self.runner.run(
                ping_command(host.address, self.timeout),
                timeout=self.timeout + _PING_GRACE,
            )
            elapsed = time.perf_counter() - start
            reachable = result.ok
            latency = parse_ping_latency(result.output) if reachable else None

        if reachable:
            logger.debug(
                "Host %s reachable (ping: %s)",
                host.address,
                f"{latency:.3f}ms" if latency is not None else "N/A",
            )
        else:
            logger.debug("Host %s not reachable", host.address)
        return ProbeOutcome(reachable=reachable, latency_ms=latency, elapsed=elapsed)
