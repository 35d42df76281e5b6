"""Tests for MountExecutor and the sshfs command shape."""

import pytest

from sshfs_monitor.errors import MountFailedError
from sshfs_monitor.models import CommandResult
from sshfs_monitor.services.mounter import MOUNT_OPTIONS, MountExecutor, build_mount_command


def test_mount_command_shape(make_host):
    """source, mount point, then one -o with the fixed options and port."""
    host = make_host("10.0.0.5", name="sshfs2", user="admin", port=2222, remote_dir="/srv/data")

    assert build_mount_command(host) == [
        "sshfs",
        "admin@10.0.0.5:/srv/data/",
        str(host.mount_point),
        "-o",
        "cache=no,attr_timeout=0,entry_timeout=0,port=2222",
    ]


def test_mount_options_disable_caching():
    assert MOUNT_OPTIONS.split(",") == ["cache=no", "attr_timeout=0", "entry_timeout=0"]


@pytest.mark.asyncio
async def test_mount_success(fake_runner, make_host):
    host = make_host("10.0.0.5")

    command, duration = await MountExecutor(fake_runner).mount(host)

    assert command.startswith("sshfs root@10.0.0.5:/root/ ")
    assert command.endswith("-o cache=no,attr_timeout=0,entry_timeout=0,port=22")
    assert duration >= 0
    assert host.mount_point.is_dir()


@pytest.mark.asyncio
async def test_mount_creates_nested_directory(fake_runner, tmp_path):
    from sshfs_monitor.models import HostEntry

    host = HostEntry(address="10.0.0.5", mount_point=tmp_path / "a" / "b" / "sshfs")

    await MountExecutor(fake_runner).mount(host)

    assert host.mount_point.is_dir()


@pytest.mark.asyncio
async def test_mount_failure_keeps_diagnostics(fake_runner, make_host):
    """The literal command and verbatim error survive a failed mount."""
    host = make_host("10.0.0.5")
    fake_runner.mount_errors["10.0.0.5"] = "read: Connection reset by peer"

    with pytest.raises(MountFailedError) as exc_info:
        await MountExecutor(fake_runner).mount(host)

    error = exc_info.value
    assert error.detail == "read: Connection reset by peer"
    assert error.command.startswith("sshfs ")
    assert error.duration >= 0


@pytest.mark.asyncio
async def test_mount_failure_leaves_directory(fake_runner, make_host):
    host = make_host("10.0.0.5")
    fake_runner.mount_errors["10.0.0.5"] = "permission denied"

    with pytest.raises(MountFailedError):
        await MountExecutor(fake_runner).mount(host)

    assert host.mount_point.is_dir()


@pytest.mark.asyncio
async def test_mount_timeout_reported(fake_runner, make_host):
    fake_runner.overrides["sshfs"] = CommandResult("", "", -9, duration=30.0, timed_out=True)

    with pytest.raises(MountFailedError, match="timed out"):
        await MountExecutor(fake_runner, timeout=30.0).mount(make_host("10.0.0.5"))


@pytest.mark.asyncio
async def test_mount_directory_error(fake_runner, tmp_path):
    """A mount point that cannot be created fails without running sshfs."""
    from sshfs_monitor.models import HostEntry

    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    host = HostEntry(address="10.0.0.5", mount_point=blocker / "sshfs")

    with pytest.raises(MountFailedError, match="failed to mount"):
        await MountExecutor(fake_runner).mount(host)

    assert fake_runner.calls == []


@pytest.mark.asyncio
async def test_hung_mount_directory_fails_without_blocking(fake_runner, make_host):
    """A mount point whose stat never returns is bounded and sshfs is not run."""
    import asyncio
    import threading
    from unittest.mock import patch

    release = threading.Event()
    ticks = 0

    async def heartbeat():
        nonlocal ticks
        while True:
            ticks += 1
            await asyncio.sleep(0.01)

    beat = asyncio.create_task(heartbeat())
    try:
        with patch(
            "sshfs_monitor.services.mounter._ensure_directory",
            side_effect=lambda path: release.wait(5),
        ):
            with pytest.raises(MountFailedError, match="timed out"):
                await MountExecutor(fake_runner, timeout=0.2).mount(make_host("10.0.0.5"))
    finally:
        release.set()
        beat.cancel()

    assert ticks > 1
    assert fake_runner.calls_to("sshfs") == []
