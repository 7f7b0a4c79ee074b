"""Blocking entry points for the async agent and generation APIs.

``run_sync`` picks how to drive a coroutine from synchronous code:
    - caller passes a loop that is not running: drive it with ``run_until_complete``
    - no loop on this thread (scripts, the CLI): ``asyncio.run``
    - a loop is already running here (Jupyter, sync code called from a
      coroutine): ``asyncio.run`` on a single worker thread, blocking until done

Example:
    >>> outcome = run_sync(agent.execute("divide 4 and 3"))
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Coroutine

T = TypeVar("T")


def run_sync(coro: Coroutine[object, object, T], *, loop: asyncio.AbstractEventLoop | None = None) -> T:
    """Block until ``coro`` finishes and return its result; its exceptions propagate."""
    if loop is not None:
        return loop.run_until_complete(coro)
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    return _run_on_worker(coro)


def _run_on_worker(coro: Coroutine[object, object, T]) -> T:
    # The caller's loop stays blocked, so sessions must not be shared with it
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="toolcall-run-sync") as pool:
        return pool.submit(asyncio.run, coro).result()
