"""Tests for MountInspector."""

import pytest

from sshfs_monitor.models import CommandResult, MountState
from sshfs_monitor.services.inspector import MountInspector


@pytest.mark.asyncio
async def test_inspect_absent(fake_runner, tmp_path):
    inspector = MountInspector(fake_runner)

    assert await inspector.inspect(tmp_path / "sshfs") is MountState.ABSENT
    # An unregistered point is never listed
    assert fake_runner.programs() == ["mountpoint"]


@pytest.mark.asyncio
async def test_inspect_healthy(fake_runner, tmp_path):
    mount_point = tmp_path / "sshfs"
    fake_runner.mounts[str(mount_point)] = MountState.HEALTHY

    assert await MountInspector(fake_runner).inspect(mount_point) is MountState.HEALTHY


@pytest.mark.asyncio
async def test_inspect_stale(fake_runner, tmp_path):
    mount_point = tmp_path / "sshfs"
    fake_runner.mounts[str(mount_point)] = MountState.STALE

    assert await MountInspector(fake_runner).inspect(mount_point) is MountState.STALE


@pytest.mark.asyncio
async def test_listing_timeout_is_stale(fake_runner, tmp_path):
    """A listing that exceeds its bound classifies as stale, not healthy."""
    mount_point = tmp_path / "sshfs"
    fake_runner.mounts[str(mount_point)] = MountState.HEALTHY
    fake_runner.overrides["ls"] = CommandResult("", "", -9, duration=5.0, timed_out=True)

    assert await MountInspector(fake_runner, timeout=5.0).inspect(mount_point) is MountState.STALE


@pytest.mark.asyncio
async def test_inspect_is_read_only(fake_runner, tmp_path):
    mount_point = tmp_path / "sshfs"
    fake_runner.mounts[str(mount_point)] = MountState.STALE
    inspector = MountInspector(fake_runner)

    await inspector.inspect(mount_point)
    await inspector.inspect(mount_point)

    assert set(fake_runner.programs()) == {"mountpoint", "ls"}


@pytest.mark.asyncio
async def test_broken_endpoint_detected(fake_runner, tmp_path):
    """Unregistered but listed in its parent and failing access."""
    mount_point = tmp_path / "sshfs"
    mount_point.mkdir()
    fake_runner.overrides["ls"] = CommandResult(
        "", "ls: cannot access: Transport endpoint is not connected", 2
    )

    assert await MountInspector(fake_runner).is_broken_endpoint(mount_point) is True


@pytest.mark.asyncio
async def test_missing_directory_is_not_broken(fake_runner, tmp_path):
    inspector = MountInspector(fake_runner)

    assert await inspector.is_broken_endpoint(tmp_path / "never-created") is False
    assert fake_runner.calls == []


@pytest.mark.asyncio
async def test_plain_directory_is_not_broken(fake_runner, tmp_path):
    mount_point = tmp_path / "sshfs"
    mount_point.mkdir()

    assert await MountInspector(fake_runner).is_broken_endpoint(mount_point) is False
