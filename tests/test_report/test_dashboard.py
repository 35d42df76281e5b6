"""Tests for the live dashboard renderer."""

from datetime import datetime
from pathlib import Path

from sshfs_monitor.models import (
    CycleReport,
    DiskUsage,
    HostEntry,
    HostResult,
    MountAction,
    ProbeOutcome,
    RemoteInfo,
)
from sshfs_monitor.report import DashboardRenderer, LocalInfo
from sshfs_monitor.utils.console import CLEAR_SCREEN, HIDE_CURSOR, SHOW_CURSOR

UP = ProbeOutcome(reachable=True, latency_ms=0.512, elapsed=0.004)
DOWN = ProbeOutcome(reachable=False, latency_ms=None, elapsed=3.0)
LOCAL = LocalInfo(hostname="monitor01", uptime="5 days", mac="52:54:00:00:00:01")
NOW = datetime(2024, 1, 1, 12, 0, 0)


def host(address: str) -> HostEntry:
    return HostEntry(address=address, mount_point=Path(f"/root/{address}"))


def make_report(*results: HostResult) -> CycleReport:
    return CycleReport(results=results, started_at=NOW, duration=0.5)


ONLINE = HostResult(
    host=host("nas"),
    probe=UP,
    action=MountAction.ALREADY_MOUNTED,
    remote_info=RemoteInfo(hostname="nas01", uptime="3 days", mac="52:54:00:12:34:56"),
    disk_usage=DiskUsage(total=1000, used=420),
)
OFFLINE = HostResult(host=host("gone"), probe=DOWN, action=MountAction.SKIPPED_UNREACHABLE)
STALE = HostResult(
    host=host("stuck"),
    probe=UP,
    action=MountAction.MOUNT_FAILED,
    recovery_attempted=True,
    recovery_succeeded=False,
)
CONN_ERR = HostResult(host=host("flaky"), probe=UP, action=MountAction.MOUNT_FAILED)


def test_badges():
    renderer = DashboardRenderer(use_colors=False)

    assert renderer.badge(ONLINE).strip() == "ONLINE"
    assert renderer.badge(OFFLINE).strip() == "OFFLINE"
    assert renderer.badge(STALE).strip() == "STALE"
    assert renderer.badge(CONN_ERR).strip() == "CONN-ERR"


def test_usage_bar():
    assert DashboardRenderer.usage_bar(DiskUsage(total=1000, used=420)) == "[████░░░░░░ 42%]"
    assert DashboardRenderer.usage_bar(None) == "[N/A]"


def test_online_host_line():
    line, mac_line = DashboardRenderer(use_colors=False).host_lines(1, ONLINE)

    assert "Host 1 (root@nas)" in line
    assert "Host: nas01" in line
    assert "Ping: 0.512ms" in line
    assert "Mount: /root/nas [████░░░░░░ 42%]" in line
    assert "Up: 3 days" in line
    assert mac_line.strip() == "└─ MAC: 52:54:00:12:34:56"


def test_offline_host_line_is_all_unavailable():
    line, mac_line = DashboardRenderer(use_colors=False).host_lines(2, OFFLINE)

    assert "Host: N/A" in line
    assert "Ping: N/A" in line
    assert "Mount: Not available" in line
    assert mac_line.strip() == "└─ MAC: N/A"


def test_failed_host_mount_text():
    renderer = DashboardRenderer(use_colors=False)

    assert "Mount: /root/stuck (stale)" in renderer.host_lines(1, STALE)[0]
    assert "Mount: Failed to connect" in renderer.host_lines(1, CONN_ERR)[0]


def test_render_header_summary_and_footer():
    report = make_report(ONLINE, OFFLINE, STALE, CONN_ERR)

    text = DashboardRenderer(use_colors=False).render(report, LOCAL, next_check=3, now=NOW)

    assert "SSHFS STATUS MONITOR" in text
    assert "Local: monitor01 | Uptime: 5 days" in text
    assert "MAC: 52:54:00:00:00:01" in text
    assert "Total: 4 hosts │ Online: 3 hosts │ Success: 75%" in text
    assert "Last updated: 2024-01-01 12:00:00" in text
    assert "Next check in: 3s" in text
    assert "\033[" not in text


def test_render_without_next_check():
    text = DashboardRenderer(use_colors=False).render(make_report(ONLINE), LOCAL, now=NOW)

    assert "Next check in" not in text


def test_host_order_matches_report():
    text = DashboardRenderer(use_colors=False).render(make_report(OFFLINE, ONLINE), LOCAL, now=NOW)

    assert text.index("root@gone") < text.index("root@nas")


def test_frame_wraps_with_control_codes():
    frame = DashboardRenderer(use_colors=False).frame(make_report(ONLINE), LOCAL)

    assert frame.startswith(HIDE_CURSOR + CLEAR_SCREEN)
    assert frame.endswith(SHOW_CURSOR)
