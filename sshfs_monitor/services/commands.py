"""Local external command execution with hard timeouts."""

import asyncio
import logging
import time
from collections.abc import Sequence

from sshfs_monitor.models import CommandResult

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
NOT_FOUND_RETURNCODE = 127


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


class SubprocessRunner:
    """Runs commands with asyncio subprocesses.

    A command that outlives its timeout is killed and reported with
    timed_out=True. Missing binaries are reported as return code 127.
    """

    async def run(self, argv: Sequence[str], timeout: float) -> CommandResult:
        """Run a command with a hard timeout.

        Args:
            argv: Program and arguments
            timeout: Seconds before the process is killed

        Returns:
            CommandResult with stdout, stderr, return code, and duration.
        """
        start = time.perf_counter()
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            logger.warning("Command not found: %s", argv[0])
            return CommandResult(
                output="",
                error=str(e),
                returncode=NOT_FOUND_RETURNCODE,
                duration=time.perf_counter() - start,
            )
        except OSError as e:
            logger.warning("Cannot start %s: %s", argv[0], e)
            return CommandResult(
                output="",
                error=str(e),
                returncode=NOT_FOUND_RETURNCODE,
                duration=time.perf_counter() - start,
            )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            duration = time.perf_counter() - start
            logger.warning("Command timed out after %.1fs: %s", duration, " ".join(argv))
            return CommandResult(
                output="",
                error="",
                returncode=-1 if process.returncode is None else process.returncode,
                duration=duration,
                timed_out=True,
            )

        duration = time.perf_counter() - start
        returncode = process.returncode if process.returncode is not None else -1
        logger.debug("Command %s exited %d in %.3fs", argv[0], returncode, duration)
        return CommandResult(
            output=_decode(stdout),
            error=_decode(stderr),
            returncode=returncode,
            duration=duration,
        )
