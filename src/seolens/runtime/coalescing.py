"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/coalescing.py.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, TypeVar

T = TypeVar("T")


class RequestCoalescer:
    """
    Deduplicate identical in-flight requests.

    Every caller, including the one that started the shared task, awaits it
    through `asyncio.shield`, so cancelling one caller never cancels the work
    other callers joined. The shared task is cancelled only once every caller
    waiting on it has gone away.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task[Any]] = {}
        self._waiters: dict[str, int] = {}
        self._lock = asyncio.Lock()
        self.coalesced = 0

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            task = self._tasks.get(key)
            if task is None:
                task = asyncio.ensure_future(factory())
                self._tasks[key] = task
                self._waiters[key] = 0
                task.add_done_callback(partial(self._release, key))
            else:
                self.coalesced += 1
            self._waiters[key] += 1

        try:
            return await asyncio.shield(task)
        finally:
            if self._leave(key, task) == 0 and not task.done():
                task.cancel()

    def _leave(self, key: str, task: asyncio.Task[Any]) -> int:
        if self._tasks.get(key) is not task:
            return 0
        remaining = self._waiters[key] - 1
        self._waiters[key] = remaining
        return remaining

    def _release(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._tasks.get(key) is task:
            self._tasks.pop(key, None)
            self._waiters.pop(key, None)
