"""Single-flight execution of an async recovery action.

The first caller starts the coroutine and stores the in-flight task; callers
arriving while it runs await the same task instead of starting their own.
Once the task settles the slot is freed, so the next call starts a new flight.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlight(Generic[T]):
    def __init__(self, name: str = "single-flight") -> None:
        self._name = name
        self._inflight: asyncio.Task[T] | None = None

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def run(self, factory: Callable[[], Awaitable[T]]) -> T:
        """Run ``factory()`` unless a flight is active; either way await its result."""
        task = self._inflight
        if task is None or task.done():
            task = asyncio.ensure_future(factory())
            self._inflight = task
            task.add_done_callback(self._release)
        else:
            logger.debug("Joining in-flight %s", self._name)
        # A cancelled waiter must not cancel the shared task
        return await asyncio.shield(task)

    def _release(self, task: asyncio.Task[T]) -> None:
        if self._inflight is task:
            self._inflight = None
