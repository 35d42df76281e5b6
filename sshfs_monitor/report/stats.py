"""Tabular one-shot report."""

from sshfs_monitor.models import UNAVAILABLE, CycleReport, DiskUsage, HostResult, MountAction

RULE = "=" * 65
THIN_RULE = "-" * 66


def human_size(num_bytes: int) -> str:
    """Format a byte count like `df -h` (1024 based, one decimal under 10)."""
    value = float(num_bytes)
    unit = "B"
    for unit in ("B", "K", "M", "G", "T", "P"):
        if value < 1024 or unit == "P":
            break
        value /= 1024
    if unit == "B":
        return f"{int(value)}B"
    return f"{value:.1f}{unit}" if value < 10 else f"{value:.0f}{unit}"


def format_usage(usage: DiskUsage | None) -> str:
    if usage is None:
        return UNAVAILABLE
    return f"{human_size(usage.total)} used: {human_size(usage.used)} ({usage.percent}%)"


def mount_status(result: HostResult) -> str:
    """Mount column text for one host."""
    if result.action is MountAction.ALREADY_MOUNTED:
        return "ALREADY MOUNTED"
    if result.action is MountAction.MOUNTED:
        return f"SUCCESS ({result.mount_duration:.6f}s)"
    if result.action is MountAction.MOUNT_FAILED:
        return f"FAILED ({result.mount_duration:.6f}s)"
    return UNAVAILABLE


def render_stats(report: CycleReport, total_time: float | None = None) -> str:
    """Render the connection stats, summary, and debug sections.

    Args:
        report: Cycle report to render
        total_time: Total execution time to print at the end, if known

    Returns:
        Multi-line report text
    """
    lines = [
        "",
        "==================== SSHFS CONNECTION STATS ====================",
        f"{'HOST':<18} {'STATUS':<12} {'PING (ms)':<12} {'PING TIME':<15} {'MOUNT TIME':<15}",
        THIN_RULE,
    ]

    for result in report.results:
        status = "REACHABLE" if result.reachable else "UNREACHABLE"
        latency = result.probe.latency_ms
        ping = f"{latency:.3f}" if result.reachable and latency is not None else UNAVAILABLE
        check_time = f"{result.probe.elapsed:.6f}s"
        lines.append(
            f"{result.host.label:<18} {status:<12} {ping:<12} "
            f"{check_time:<15} {mount_status(result):<15}".rstrip()
        )
        if result.error:
            lines.append(f"{'':<18} error: {result.error}")

    lines += [
        RULE,
        "SUMMARY:",
        f"  Total hosts configured: {report.total}",
        f"  Hosts reachable: {report.reachable_count}",
        f"  Hosts mounted: {report.mounted_count}",
        f"  Success rate: {report.mount_success_rate}%",
        "",
    ]

    mounted = [r for r in report.results if r.mounted]
    if mounted:
        lines.append("Active mount points:")
        for result in mounted:
            host = result.host
            lines.append(
                f"  {host.mount_point} -> {host.label}:{host.port}:{host.remote_dir.rstrip('/')}/ "
                f"[{format_usage(result.disk_usage)}]"
            )
    lines.append(RULE)

    lines += [
        "",
        "==================== DEBUG CONNECTION INFO ====================",
        "Port Configuration:",
    ]
    for result in report.results:
        host = result.host
        lines.append(
            f"  {host.label:<18} Port: {host.port:<5} Mount: {str(host.mount_point):<20} "
            f"Remote: {host.remote_dir}"
        )

    lines += ["", "Actual SSHFS Commands Executed:"]
    for result in report.results:
        if result.executed_command:
            lines.append(f"  {result.executed_command}")
        elif result.action is MountAction.ALREADY_MOUNTED:
            lines.append(f"  {result.host.label}: Already mounted, no command executed")
        else:
            lines.append(f"  {result.host.label}: No command executed (host not reachable)")

    recovered = [r for r in report.results if r.recovery_attempted]
    if recovered:
        lines += ["", "Stale Endpoint Recovery:"]
        for result in recovered:
            outcome = "cleared" if result.recovery_succeeded else "incomplete"
            lines.append(f"  {result.host.label}: {outcome} ({'; '.join(result.trace)})")

    lines.append(RULE)
    if total_time is not None:
        lines.append(f"Total execution time: {total_time:.6f}s")
    return "\n".join(lines)
