from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Optional


async def _invoke(func: Callable[..., Any], *args: Any) -> Any:
    if inspect.iscoroutinefunction(func):
        return await func(*args)
    # Plain functions may block; keep them off the event loop.
    value = await asyncio.to_thread(func, *args)
    if inspect.isawaitable(value):
        return await value
    return value


async def settle(
    func: Callable[..., Any], *args: Any, timeout: Optional[float] = None
) -> Any:
    """Call a gate method and wait at most ``timeout`` seconds for its answer.

    Gates may implement their methods either as coroutines or as ordinary
    functions. Ordinary functions run in a worker thread. A thread cannot be
    stopped, so a timed out call keeps running and its late answer is
    discarded.

    Raises:
        asyncio.TimeoutError: If the call does not finish in time.
    """
    if timeout is None:
        return await _invoke(func, *args)
    return await asyncio.wait_for(_invoke(func, *args), timeout)
