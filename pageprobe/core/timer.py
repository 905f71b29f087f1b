"""One-shot fixed-delay scheduling on the host event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class DeferredTimer:
    """
    Runs a coroutine callback once, after a fixed delay.

    The delay is a settle time, not a load-complete signal: a page whose
    scripts are still rendering when it fires is captured as-is. Overlapping
    schedules are neither debounced nor cancelled; each one fires.
    """

    def __init__(self) -> None:
        # Each pending handle maps to a future resolved when it fires
        self._handles: dict[asyncio.TimerHandle, asyncio.Future] = {}
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._handles) + len(self._tasks)

    def schedule(self, delay_ms: int, callback: Callable[[], Awaitable[None]]) -> None:
        """Schedule callback() after delay_ms. Must be called on the running loop."""
        loop = asyncio.get_running_loop()
        handle: asyncio.TimerHandle | None = None
        fired = loop.create_future()

        def _fire() -> None:
            self._handles.pop(handle, None)
            task = loop.create_task(callback())
            self._tasks.add(task)
            task.add_done_callback(self._on_done)
            fired.set_result(None)

        handle = loop.call_later(delay_ms / 1000, _fire)
        self._handles[handle] = fired
        logger.debug("Scheduled %s in %d ms", getattr(callback, "__name__", "callback"), delay_ms)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Deferred callback failed", exc_info=task.exception())

    async def wait_idle(self) -> None:
        """Wait until every scheduled callback has fired and finished."""
        while self._handles or self._tasks:
            waiters = set(self._tasks) | set(self._handles.values())
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)

    def cancel_all(self) -> None:
        for handle, fired in self._handles.items():
            handle.cancel()
            fired.cancel()
        self._handles.clear()
        for task in self._tasks:
            task.cancel()
