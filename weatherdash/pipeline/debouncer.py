"""Trailing-edge debounce with a single scheduled-task slot."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs a coroutine function once input has been quiet for `delay_ms`.

    Each schedule() cancels the pending timer and starts a new one. Must be
    used from inside a running event loop.
    """

    def __init__(self, delay_ms: int):
        self.delay = delay_ms / 1000
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def schedule(self, func: Callable[..., Awaitable[Any]], *args: Any) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay, self._fire, func, args)

    def cancel(self) -> bool:
        """Drop the pending call. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    async def drain(self) -> None:
        """Wait for the pending timer to fire and all started calls to finish."""
        loop = asyncio.get_running_loop()
        while self._handle is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
            elif self._handle is not None:
                await asyncio.sleep(max(self._handle.when() - loop.time(), 0))
                # let the timer callback run before re-checking
                await asyncio.sleep(0)

    def _fire(self, func: Callable[..., Awaitable[Any]], args: tuple) -> None:
        self._handle = None
        task = asyncio.ensure_future(func(*args))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced call raised", exc_info=exc)
