"""Entry point for the sshfs-monitor command line."""

import argparse
import asyncio
import logging
import signal
import subprocess
import sys
import time
from datetime import datetime

from sshfs_monitor.config import Config, Settings
from sshfs_monitor.daemon import PidFile, StopResult
from sshfs_monitor.dependencies import Dependencies
from sshfs_monitor.errors import DaemonAlreadyRunningError, HostsFileError
from sshfs_monitor.models import CycleReport
from sshfs_monitor.report import DashboardRenderer, LocalInfo, render_stats
from sshfs_monitor.services import CycleScheduler
from sshfs_monitor.utils.console import SHOW_CURSOR, MonitorFormatter, PlainFileFormatter

logger = logging.getLogger("sshfs_monitor")

COMMANDS = {
    "start": "Start daemon mode (continuous monitoring)",
    "stop": "Stop daemon mode",
    "restart": "Restart daemon mode",
    "status": "Show daemon status",
    "logs": "Follow log file",
    "once": "Run once with full stats",
    "watch": "Live status display (default)",
    "dashboard": "Single status snapshot",
}


def configure_logging(
    settings: Settings,
    log_file: str | None = None,
    console: bool = True,
) -> None:
    """Configure logging for the sshfs_monitor package.

    Args:
        settings: Settings providing level and color preferences
        log_file: Also append plain records to this file (daemon mode)
        console: Attach the colorful stderr handler; watch/dashboard
            screens turn it off so log lines do not tear the display
    """
    level = getattr(logging, settings.log_level, logging.INFO)
    use_colors = settings.log_colors and sys.stderr.isatty()

    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    if console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MonitorFormatter(use_colors=use_colors))
        logger.addHandler(handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            logger.error("Cannot open log file %s: %s", log_file, e)
        else:
            file_handler.setFormatter(PlainFileFormatter())
            logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logging.getLogger("asyncssh").setLevel(logging.WARNING)


def _install_stop_handlers(stop: asyncio.Event) -> None:
    """Route SIGTERM/SIGINT to the stop event.

    The in-flight cycle keeps running; only the next one is prevented.
    """
    loop = asyncio.get_running_loop()

    def _on_signal() -> None:
        if not stop.is_set():
            logger.info("Received shutdown signal, finishing current cycle...")
        stop.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, _on_signal)


async def _run_daemon(deps: Dependencies) -> None:
    stop = asyncio.Event()
    _install_stop_handlers(stop)
    scheduler = CycleScheduler(
        deps.reconciler,
        load_hosts=deps.config.reload_hosts,
        interval=deps.config.check_interval,
        stop_event=stop,
    )
    try:
        await scheduler.run_forever()
    finally:
        await deps.cleanup()


async def _run_watch(deps: Dependencies, renderer: DashboardRenderer) -> None:
    stop = asyncio.Event()
    _install_stop_handlers(stop)
    interval = deps.config.watch_interval

    def _paint(report: CycleReport) -> None:
        sys.stdout.write(renderer.frame(report, LocalInfo.collect(), next_check=interval))
        sys.stdout.flush()

    scheduler = CycleScheduler(
        deps.reconciler,
        load_hosts=deps.config.reload_hosts,
        interval=interval,
        stop_event=stop,
        on_report=_paint,
    )
    try:
        await scheduler.run_forever()
    finally:
        await deps.cleanup()


async def _run_single_cycle(deps: Dependencies) -> CycleReport:
    try:
        return await deps.reconciler.run_cycle(deps.config.get_hosts())
    finally:
        await deps.cleanup()


def cmd_start(config: Config) -> int:
    """Run the monitor daemon in the foreground until signalled."""
    configure_logging(config.settings, log_file=config.log_file)
    pid_file = PidFile(config.pid_file)

    try:
        config.get_hosts()
        pid_file.acquire()
    except (HostsFileError, DaemonAlreadyRunningError) as e:
        print(f"Error: {e}")
        return 1
    except OSError as e:
        print(f"Error: failed to write PID file {config.pid_file}: {e}")
        return 1

    logger.info("SSHFS monitor started in daemon mode (PID: %d)", pid_file.read_pid() or 0)
    try:
        asyncio.run(_run_daemon(Dependencies.from_config(config)))
    finally:
        pid_file.remove()
        logger.info("SSHFS monitor stopped")
    return 0


def cmd_stop(config: Config) -> int:
    pid_file = PidFile(config.pid_file)
    pid = pid_file.running_pid()
    if pid is None:
        print("SSHFS monitor not running")
        return 0

    grace = config.stop_grace
    print(f"Stopping SSHFS monitor (PID: {pid}), waiting up to {grace:.0f}s for the current cycle...")
    result = pid_file.stop(grace=grace)
    if result is StopResult.KILLED:
        print("Force killed SSHFS monitor")
    print("SSHFS monitor stopped")
    return 0


def cmd_restart(config: Config) -> int:
    cmd_stop(config)
    time.sleep(1)
    return cmd_start(config)


def cmd_status(config: Config) -> int:
    """Report whether the daemon is alive.

    Returns:
        0 when running, 1 otherwise
    """
    pid_file = PidFile(config.pid_file)
    stale = pid_file.is_stale()
    pid = pid_file.running_pid()
    if pid is None:
        print("SSHFS monitor not running (stale PID file)" if stale else "SSHFS monitor not running")
        return 1

    print(f"SSHFS monitor running (PID: {pid})")
    print(f"Log file: {config.log_file}")
    print(f"Check interval: {config.check_interval}s")
    return 0


def cmd_logs(config: Config) -> int:
    try:
        return subprocess.run(["tail", "-f", config.log_file], check=False).returncode
    except KeyboardInterrupt:
        return 0


def cmd_once(config: Config) -> int:
    """Run one cycle and print the full stats report.

    Returns:
        0 when no reachable host failed to mount, 1 otherwise
    """
    configure_logging(config.settings)
    start = time.perf_counter()
    print(f"SSHFS Auto-Mount - {datetime.now().strftime('%a %b %d %H:%M:%S %Y')}")
    print("Autodetecting and mounting SSHFS hosts in parallel...")

    try:
        report = asyncio.run(_run_single_cycle(Dependencies.from_config(config)))
    except HostsFileError as e:
        print(f"Error: {e}")
        return 1

    print(render_stats(report, total_time=time.perf_counter() - start))
    return 0 if report.failed_count == 0 else 1


def cmd_watch(config: Config) -> int:
    configure_logging(config.settings, console=False)
    renderer = DashboardRenderer(use_colors=config.settings.log_colors)

    try:
        config.get_hosts()
    except HostsFileError as e:
        print(f"Error: {e}")
        return 1

    print("Starting live status monitor (Press Ctrl+C to exit)...")
    print("Loading SSHFS monitor...")
    try:
        asyncio.run(_run_watch(Dependencies.from_config(config), renderer))
    finally:
        sys.stdout.write(SHOW_CURSOR)
        sys.stdout.flush()
    return 0


def cmd_dashboard(config: Config) -> int:
    configure_logging(config.settings, console=False)
    renderer = DashboardRenderer(use_colors=config.settings.log_colors)

    try:
        report = asyncio.run(_run_single_cycle(Dependencies.from_config(config)))
    except HostsFileError as e:
        print(f"Error: {e}")
        return 1

    sys.stdout.write(renderer.frame(report, LocalInfo.collect()))
    sys.stdout.flush()
    return 0


def show_usage(config: Config) -> int:
    print("SSHFS Auto-Mount Monitor")
    print()
    print(f"Usage: sshfs-monitor {{{'|'.join(COMMANDS)}}}")
    print()
    print("Commands:")
    for name, description in COMMANDS.items():
        print(f"  {name:<10} - {description}")
    print()
    print("Configuration:")
    print(f"  Check interval: {config.check_interval}s")
    print(f"  Log file: {config.log_file}")
    print(f"  PID file: {config.pid_file}")
    print(f"  Hosts file: {config.hosts_file}")
    try:
        hosts = config.get_hosts()
    except HostsFileError:
        print(f"  Hosts: Error loading from {config.hosts_file}")
    else:
        print(f"  Hosts ({len(hosts)}): {', '.join(h.label for h in hosts)}")
    return 1


HANDLERS = {
    "start": cmd_start,
    "stop": cmd_stop,
    "restart": cmd_restart,
    "status": cmd_status,
    "logs": cmd_logs,
    "once": cmd_once,
    "watch": cmd_watch,
    "dashboard": cmd_dashboard,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sshfs-monitor",
        description="Discover, mount, and monitor SSHFS hosts.",
        epilog="\n".join(f"  {name:<10} {text}" for name, text in COMMANDS.items()),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", nargs="?", default="watch", help="command to run (default: watch)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch to a command handler.

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    config = Config.from_env()
    handler = HANDLERS.get(args.command, show_usage)
    return handler(config)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
