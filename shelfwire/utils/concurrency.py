"""Bounded fan-out helpers."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")

FANOUT_CONCURRENCY = int(os.environ.get("FANOUT_CONCURRENCY", 5))


async def bounded_gather(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    *,
    concurrency: int = FANOUT_CONCURRENCY,
) -> list[R]:
    """Run ``func`` over ``items`` with at most ``concurrency`` in flight.

    Results keep the order of ``items``. The first failure propagates once
    every branch has settled.
    """
    semaphore = asyncio.Semaphore(max(concurrency, 1))

    async def run(item: T) -> R:
        async with semaphore:
            return await func(item)

    results = await asyncio.gather(*(run(item) for item in items), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
