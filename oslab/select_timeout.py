"""Racing awaitables against each other and against a deadline."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout_ms: int) -> T | None:
    """Return the awaitable's result if it finishes within ``timeout_ms``, else None.

    An awaitable that runs out of time is cancelled.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout_ms / 1000)
    except asyncio.TimeoutError:
        return None


async def race(first: Awaitable[T], second: Awaitable[T]) -> T:
    """Return the result of whichever awaitable finishes first; cancel the other."""
    tasks = [asyncio.ensure_future(first), asyncio.ensure_future(second)]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
    winner = next(task for task in tasks if task in done)
    return winner.result()