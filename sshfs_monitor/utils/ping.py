"""Host connectivity checking utilities."""

import asyncio
import re

_PING_TIME = re.compile(r"time[=<]\s*([0-9]+(?:\.[0-9]+)?)")


def ping_command(address: str, timeout: int) -> list[str]:
    """Build a single-echo ping invocation.

    Args:
        address: Host to ping.
        timeout: Seconds to wait for the reply.

    Returns:
        argv for ping.
    """
    return ["ping", "-c", "1", "-W", str(max(1, int(timeout))), address]


def parse_ping_latency(output: str) -> float | None:
    """Extract the round-trip time in milliseconds from ping output.

    Returns:
        Latency in ms, or None when no reply line is present.
    """
    match = _PING_TIME.search(output)
    if not match:
        return None
    return float(match.group(1))


async def check_host_online(hostname: str, port: int, timeout: float = 2.0) -> bool:
    """Check if a host is reachable via TCP connection.

    Args:
        hostname: Host to check.
        port: Port to connect to (usually SSH port).
        timeout: Connection timeout in seconds.

    Returns:
        True if host is reachable, False otherwise.
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(hostname, port),
            timeout=timeout,
        )
        writer.close()
        await writer.wait_closed()
        return True
    except (TimeoutError, asyncio.TimeoutError, OSError):
        return False
