from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


async def run_until_stopped(coro: Awaitable[T], stop_event: asyncio.Event | None) -> T:
    """Await ``coro`` and cancel it as soon as ``stop_event`` is set.

    Raises asyncio.CancelledError when the stop event wins.
    """
    task = asyncio.ensure_future(coro)
    if stop_event is None:
        return await task
    if stop_event.is_set():
        task.cancel()
    watcher = asyncio.ensure_future(stop_event.wait())
    watcher.add_done_callback(lambda done: done.cancelled() or task.cancel())
    try:
        return await task
    finally:
        watcher.cancel()


def stopped_by(stop_event: asyncio.Event | None) -> bool:
    """True when a CancelledError came from ``stop_event`` rather than the caller's task."""
    if stop_event is None or not stop_event.is_set():
        return False
    current = asyncio.current_task()
    return current is None or current.cancelling() == 0
