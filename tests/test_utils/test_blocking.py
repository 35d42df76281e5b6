"""Tests for bounded blocking calls."""

import asyncio
import threading

import pytest

from sshfs_monitor.utils.blocking import run_bounded


@pytest.mark.asyncio
async def test_returns_result():
    assert await run_bounded(sum, [1, 2, 3], timeout=1.0) == 6


@pytest.mark.asyncio
async def test_propagates_error():
    def explode(path):
        raise FileNotFoundError(path)

    with pytest.raises(FileNotFoundError):
        await run_bounded(explode, "/missing", timeout=1.0)


@pytest.mark.asyncio
async def test_timeout_leaves_daemon_thread():
    """A call that never returns times out and cannot block process exit."""
    release = threading.Event()
    started = threading.Event()
    worker: list[threading.Thread] = []

    def hang():
        worker.append(threading.current_thread())
        started.set()
        release.wait(5)

    try:
        with pytest.raises(asyncio.TimeoutError):
            await run_bounded(hang, timeout=0.05)
        assert started.wait(1)
        assert worker[0].daemon is True
    finally:
        release.set()
