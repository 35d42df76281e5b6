"""Shared fixtures: a scripted command runner simulating hosts and mounts."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from sshfs_monitor.models import CommandResult, HostEntry, MountState


def ok(output: str = "") -> CommandResult:
    return CommandResult(output=output, error="", returncode=0, duration=0.01)


def fail(error: str = "", returncode: int = 1) -> CommandResult:
    return CommandResult(output="", error=error, returncode=returncode, duration=0.01)


class FakeRunner:
    """CommandRunner double with an in-memory mount table.

    - ping succeeds for addresses in `reachable` (value is the latency in ms)
    - mountpoint/ls answer from `mounts`; a STALE entry fails ls
    - fusermount/umount release a mount only if its strategy is listed in
      `releasing[mount_point]`
    - sshfs marks the mount HEALTHY unless the address is in `mount_errors`
    - `overrides[program]` returns a fixed result for every call
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.reachable: dict[str, float] = {}
        self.mounts: dict[str, MountState] = {}
        self.mount_errors: dict[str, str] = {}
        self.releasing: dict[str, set[str]] = {}
        self.overrides: dict[str, CommandResult | Callable[[list[str]], CommandResult]] = {}

    async def run(self, argv: Sequence[str], timeout: float) -> CommandResult:
        argv = list(argv)
        self.calls.append(argv)
        program = argv[0]

        if program in self.overrides:
            override = self.overrides[program]
            return override(argv) if callable(override) else override

        handler = getattr(self, f"_{program}", None)
        if handler is None:
            return fail(f"{program}: command not found", returncode=127)
        return handler(argv)

    def programs(self) -> list[str]:
        return [call[0] for call in self.calls]

    def calls_to(self, *programs: str) -> list[list[str]]:
        return [call for call in self.calls if call[0] in programs]

    def _ping(self, argv: list[str]) -> CommandResult:
        address = argv[-1]
        if address not in self.reachable:
            return fail(returncode=1)
        latency = self.reachable[address]
        return ok(f"64 bytes from {address}: icmp_seq=1 ttl=64 time={latency} ms\n")

    def _mountpoint(self, argv: list[str]) -> CommandResult:
        if argv[-1] in self.mounts:
            return ok()
        return fail(returncode=32)

    def _ls(self, argv: list[str]) -> CommandResult:
        path = argv[-1]
        if self.mounts.get(path) is MountState.STALE:
            return fail(
                f"ls: cannot access '{path}': Transport endpoint is not connected",
                returncode=2,
            )
        return ok()

    def _unmount(self, strategy: str, path: str) -> CommandResult:
        if strategy in self.releasing.get(path, set()):
            self.mounts.pop(path, None)
            return ok()
        return fail(f"{strategy}: {path}: device is busy")

    def _fusermount(self, argv: list[str]) -> CommandResult:
        return self._unmount("graceful", argv[-1])

    def _umount(self, argv: list[str]) -> CommandResult:
        strategy = {"-f": "forced", "-l": "lazy"}.get(argv[1], "plain")
        return self._unmount(strategy, argv[-1])

    def _sshfs(self, argv: list[str]) -> CommandResult:
        source, mount_point = argv[1], argv[2]
        address = source.split("@", 1)[-1].split(":", 1)[0]
        if address in self.mount_errors:
            return fail(self.mount_errors[address])
        self.mounts[mount_point] = MountState.HEALTHY
        return ok()


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Fresh scripted runner with no reachable hosts and no mounts."""
    return FakeRunner()


@pytest.fixture
def make_host(tmp_path: Path) -> Callable[..., HostEntry]:
    """Factory for hosts whose mount points live under tmp_path."""

    def _make(address: str, name: str | None = None, **kwargs) -> HostEntry:
        mount_point = tmp_path / (name or f"mnt-{address}")
        return HostEntry(address=address, mount_point=mount_point, **kwargs)

    return _make
