"""Cancelable delayed callbacks.

The animation layer only needs `call_later(delay, callback) -> handle` with
`handle.cancel()`. AsyncioScheduler serves the web UI, ManualScheduler runs
on a virtual clock for tests and headless use. Renderers with their own loop
(Textual) wrap it in the same two methods.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedule on an asyncio loop (the running loop unless one is given)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ManualHandle:
    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock; nothing fires until advance() moves time forward."""

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, ManualHandle]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        if any(h.cancelled for _, _, h in self._queue):
            self._queue = [entry for entry in self._queue if not entry[2].cancelled]
            heapq.heapify(self._queue)
        handle = ManualHandle(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.deadline, next(self._seq), handle))
        return handle

    def pending(self) -> int:
        """Number of scheduled callbacks that have neither fired nor been canceled."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks in deadline order.

        Callbacks scheduled while advancing fire too if they fall inside the
        window. Returns how many callbacks ran.
        """
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = deadline
            handle.fired = True
            handle.callback()
            fired += 1
        self._now = target
        return fired
