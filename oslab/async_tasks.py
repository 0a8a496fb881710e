"""Running many small coroutines concurrently as event-loop tasks."""

from __future__ import annotations

import asyncio


async def _square(i: int) -> int:
    return i * i


async def _sleep_then_report(task_id: int, duration_ms: int) -> int:
    await asyncio.sleep(duration_ms / 1000)
    return task_id


async def concurrent_squares(n: int) -> list[int]:
    """Compute ``i * i`` for each i in ``range(n)`` in separate tasks, in order."""
    tasks = [asyncio.create_task(_square(i)) for i in range(n)]
    return [await task for task in tasks]


async def parallel_sleep_tasks(n: int, duration_ms: int) -> list[int]:
    """Start ``n`` tasks that each sleep ``duration_ms`` and return their id.

    The tasks sleep concurrently, so the total time is close to one task's.
    The ids are returned sorted.
    """
    tasks = [asyncio.create_task(_sleep_then_report(i, duration_ms)) for i in range(n)]
    return sorted(await asyncio.gather(*tasks))