"""PID file based single-instance enforcement."""

import logging
import os
import signal
import time
from enum import Enum
from pathlib import Path

from sshfs_monitor.errors import DaemonAlreadyRunningError

logger = logging.getLogger(__name__)


class StopResult(str, Enum):
    """Outcome of stopping a running monitor."""

    NOT_RUNNING = "not_running"
    STOPPED = "stopped"
    KILLED = "killed"


def is_process_running(pid: int) -> bool:
    """Check whether a process with this PID exists."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists but belongs to another user
        return True
    return True


class PidFile:
    """Liveness marker for the monitor daemon.

    A PID file whose process is gone is stale and is removed on sight.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def read_pid(self) -> int | None:
        """Read the recorded PID, or None if missing or unparseable."""
        try:
            return int(self.path.read_text().strip())
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Unreadable PID file %s: %s", self.path, e)
            return None

    def running_pid(self) -> int | None:
        """Return the PID of a live monitor, clearing a stale file.

        Returns:
            PID of the running monitor, or None
        """
        pid = self.read_pid()
        if pid is None:
            if self.path.exists():
                self.remove()
            return None
        if is_process_running(pid):
            return pid
        logger.info("Removing stale PID file %s (PID %d)", self.path, pid)
        self.remove()
        return None

    def is_stale(self) -> bool:
        """True when a PID file exists but its process does not."""
        pid = self.read_pid()
        return pid is not None and not is_process_running(pid)

    def acquire(self, pid: int | None = None) -> None:
        """Record this process as the running monitor.

        Raises:
            DaemonAlreadyRunningError: If another live monitor holds the file
        """
        existing = self.running_pid()
        if existing is not None and existing != os.getpid():
            raise DaemonAlreadyRunningError(existing)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(str(pid if pid is not None else os.getpid()))

    def remove(self) -> None:
        """Delete the PID file if present."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def stop(self, grace: float = 2.0, poll_interval: float = 0.1) -> StopResult:
        """Terminate the recorded monitor, escalating to SIGKILL.

        Args:
            grace: Seconds to wait after SIGTERM before SIGKILL
            poll_interval: Seconds between liveness checks

        Returns:
            StopResult describing what happened
        """
        pid = self.running_pid()
        if pid is None:
            return StopResult.NOT_RUNNING

        os.kill(pid, signal.SIGTERM)
        deadline = time.monotonic() + grace
        while time.monotonic() < deadline:
            if not is_process_running(pid):
                self.remove()
                return StopResult.STOPPED
            time.sleep(poll_interval)

        if is_process_running(pid):
            os.kill(pid, signal.SIGKILL)
            self.remove()
            return StopResult.KILLED

        self.remove()
        return StopResult.STOPPED
