"""Live terminal dashboard.

Pure formatting over a CycleReport; every value shown was gathered by the
reconciliation cycle, except the local header fields.
"""

from dataclasses import dataclass
from datetime import datetime

from sshfs_monitor.models import UNAVAILABLE, CycleReport, DiskUsage, HostResult, MountAction
from sshfs_monitor.utils.console import CLEAR_SCREEN, COLORS, HIDE_CURSOR, SHOW_CURSOR
from sshfs_monitor.utils.hostname import get_local_mac, get_local_uptime, get_server_hostname

BOX_WIDTH = 62
BAR_LENGTH = 10


@dataclass(frozen=True)
class LocalInfo:
    """Identity of the machine running the monitor."""

    hostname: str = UNAVAILABLE
    uptime: str = UNAVAILABLE
    mac: str = UNAVAILABLE

    @classmethod
    def collect(cls) -> "LocalInfo":
        return cls(
            hostname=get_server_hostname(),
            uptime=get_local_uptime(),
            mac=get_local_mac(),
        )


class DashboardRenderer:
    """Renders the boxed status screen."""

    def __init__(self, use_colors: bool = True) -> None:
        self.use_colors = use_colors

    def _c(self, *names: str) -> str:
        if not self.use_colors:
            return ""
        return "".join(COLORS[name] for name in names)

    def _box_line(self, text: str, color: str) -> str:
        padding = max(0, BOX_WIDTH - len(text))
        return f"{color}║{text}{' ' * padding}║{self._c('reset')}"

    def badge(self, result: HostResult) -> str:
        """Status badge: ONLINE, STALE, CONN-ERR, or OFFLINE."""
        if not result.reachable:
            return f"{self._c('bg_red', 'white', 'bold')} OFFLINE {self._c('reset')}"
        if result.mounted:
            return f"{self._c('bg_green', 'black', 'bold')} ONLINE  {self._c('reset')}"
        if result.recovery_attempted and not result.recovery_succeeded:
            return f"{self._c('bg_yellow', 'black', 'bold')} STALE   {self._c('reset')}"
        return f"{self._c('bg_yellow', 'black', 'bold')} CONN-ERR{self._c('reset')}"

    @staticmethod
    def usage_bar(usage: DiskUsage | None) -> str:
        if usage is None:
            return f"[{UNAVAILABLE}]"
        filled = min(BAR_LENGTH, usage.percent // 10)
        return f"[{'█' * filled}{'░' * (BAR_LENGTH - filled)} {usage.percent}%]"

    def host_lines(self, index: int, result: HostResult) -> list[str]:
        """Two lines per host: status row and MAC row."""
        host = result.host
        label = f"Host {index}"
        badge = self.badge(result)
        info = result.remote_info
        dim, reset = self._c("dim"), self._c("reset")

        if not result.reachable:
            return [
                f"  {badge} {label} ({host.label}) | Host: {UNAVAILABLE} | Ping: {UNAVAILABLE} "
                f"| Mount: Not available | Up: {UNAVAILABLE}",
                f"    {dim}└─ MAC: {UNAVAILABLE}{reset}",
            ]

        latency = result.probe.latency_ms
        ping = f"{latency:.3f}ms" if latency is not None else UNAVAILABLE
        if result.mounted:
            mount = f"{host.mount_point} {self.usage_bar(result.disk_usage)}"
        elif result.action is MountAction.MOUNT_FAILED and result.recovery_attempted:
            mount = f"{host.mount_point} (stale)"
        else:
            mount = "Failed to connect"

        return [
            f"  {badge} {label} ({host.label}) | Host: {info.hostname} | Ping: {ping} "
            f"| Mount: {mount} | Up: {info.uptime}",
            f"    {dim}└─ MAC: {info.mac}{reset}",
        ]

    def render(
        self,
        report: CycleReport,
        local: LocalInfo,
        next_check: int | None = None,
        now: datetime | None = None,
    ) -> str:
        """Render a full dashboard frame.

        Args:
            report: Latest cycle report
            local: Local machine identity for the header
            next_check: Seconds until the next refresh, shown in the footer
            now: Timestamp for "Last updated" (defaults to now)

        Returns:
            Dashboard text without terminal control codes
        """
        header = self._c("bold", "cyan")
        summary = self._c("bold", "blue")
        dim, reset = self._c("dim"), self._c("reset")
        now = now or datetime.now()

        lines = [
            f"{header}╔{'═' * BOX_WIDTH}╗{reset}",
            self._box_line("                    SSHFS STATUS MONITOR", header),
            self._box_line(f"  Local: {local.hostname} | Uptime: {local.uptime}", header),
            self._box_line(f"  MAC: {local.mac}", header),
            f"{header}╚{'═' * BOX_WIDTH}╝{reset}",
            "",
        ]

        for index, result in enumerate(report.results, start=1):
            lines.extend(self.host_lines(index, result))

        summary_text = (
            f" Total: {report.total} hosts │ Online: {report.reachable_count} hosts "
            f"│ Success: {report.online_rate}%"
        )
        padding = max(0, BOX_WIDTH - len(summary_text))
        lines += [
            f"{summary}┌─ SUMMARY {'─' * (BOX_WIDTH - 10)}┐{reset}",
            f"{summary}│{reset}{summary_text}{' ' * padding}{summary}│{reset}",
            f"{summary}└{'─' * BOX_WIDTH}┘{reset}",
            "",
            f"{dim}Last updated: {now.strftime('%Y-%m-%d %H:%M:%S')}{reset}",
        ]
        if next_check is not None:
            lines.append(f"{dim}Next check in: {next_check}s | Press Ctrl+C to stop{reset}")

        return "\n".join(lines) + "\n"

    def frame(self, report: CycleReport, local: LocalInfo, next_check: int | None = None) -> str:
        """Render a frame that repaints the whole terminal in one write."""
        return f"{HIDE_CURSOR}{CLEAR_SCREEN}{self.render(report, local, next_check)}{SHOW_CURSOR}"
