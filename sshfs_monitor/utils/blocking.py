"""Bounded blocking calls against paths that may sit on a dead FUSE mount.

A stat() or mkdir() into a wedged sshfs root can block in the kernel
indefinitely. These calls run in their own daemon thread so the event loop
stays free, and a thread that never returns cannot hold up interpreter exit
the way a default-executor worker does in asyncio.run().
"""

import asyncio
import threading
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


async def run_bounded(func: Callable[..., T], *args: Any, timeout: float) -> T:
    """Run a blocking call off the event loop with an upper bound.

    Args:
        func: Blocking callable
        *args: Positional arguments for func
        timeout: Seconds to wait for the result

    Returns:
        Whatever func returns

    Raises:
        asyncio.TimeoutError: If func does not finish within timeout
        Exception: Anything func raised
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def _settle(result: Any, error: Exception | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def _worker() -> None:
        result, error = None, None
        try:
            result = func(*args)
        except Exception as e:
            error = e
        try:
            loop.call_soon_threadsafe(_settle, result, error)
        except RuntimeError:
            # Loop already closed; nobody is waiting any more
            pass

    name = getattr(func, "__name__", "call")
    threading.Thread(target=_worker, name=f"sshfs-monitor-{name}", daemon=True).start()
    return await asyncio.wait_for(future, timeout=timeout)
