"""Drive async image sources from the synchronous CLI."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, TypeVar

from bookfold.exceptions import AsyncExecutionError

if TYPE_CHECKING:
    from collections.abc import Coroutine

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from sync code.

    Without a running loop the coroutine gets its own `asyncio.run` and its
    exceptions propagate unchanged. Inside a running loop (a notebook, an
    async test) it runs on a one-off worker thread with a fresh loop, and a
    failure is raised as `AsyncExecutionError`.

    Args:
        coro: The coroutine to run.

    Returns:
        The coroutine's result.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    return _run_on_worker_thread(coro)


def _run_on_worker_thread(coro: Coroutine[Any, Any, T]) -> T:
    """Run `coro` on a dedicated thread and wait for it.

    Raises:
        AsyncExecutionError: If the coroutine raises.
    """
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="bookfold-async") as pool:
        future = pool.submit(asyncio.run, coro)
        try:
            return future.result()
        except Exception as exc:
            raise AsyncExecutionError(result=exc) from exc
