"""Utility helpers for running blocking callables in a thread pool.

This module provides a thin wrapper around ``asyncio.loop.run_in_executor``
so that file I/O and plugin imports can run without blocking the event loop.
The **default** executor is sufficient for the small JSON documents the bot
stores.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

__all__ = ["ensure_awaitable", "run_in_threadpool"]

T = TypeVar("T")


def run_in_threadpool(func: Callable[..., T], *args: Any, **kwargs: Any) -> asyncio.Future[T]:
    """Run *func* in the event-loop's default thread-pool executor.

    Example
    -------
    >>> content = await run_in_threadpool(path.read_text, encoding="utf-8")

    The returned awaitable resolves to the function's return value.
    """
    loop = asyncio.get_running_loop()
    partial_func: Callable[[], T] = functools.partial(func, *args, **kwargs)
    return loop.run_in_executor(None, partial_func)


def ensure_awaitable(func: Callable[..., Any]) -> Callable[..., Awaitable[Any]]:
    """
    Return *func* unchanged if it is already a coroutine-function.
    Otherwise wrap it in a coroutine that runs *func* in the thread pool, so
    a blocking sync callable never stalls the event loop and can be abandoned
    by ``asyncio.wait_for``.
    """
    if inspect.iscoroutinefunction(func):
        return func

    @functools.wraps(func)
    async def _wrapper(*a: Any, **kw: Any) -> Any:
        result = await run_in_threadpool(func, *a, **kw)
        if inspect.isawaitable(result):
            return await result
        return result

    return _wrapper
