"""Timer abstraction used for staggered notices and auto-dismissal."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol


class Scheduler(Protocol):
    def call_later(self, delay_ms: float, callback: Callable[[], object]) -> None: ...


class AsyncioScheduler:
    """Schedules callbacks on the running event loop (``loop.call_later``)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], object]) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(max(delay_ms, 0) / 1000, callback)
