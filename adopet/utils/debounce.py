"""
Debounce utility for rapidly changing input values.
"""

import asyncio
from typing import Any, Callable, Generic, Optional, TypeVar

from loguru import logger

T = TypeVar("T")


class Debouncer(Generic[T]):
    """
    Delivers only the last value of a burst once it has settled.

    Every ``push`` cancels the pending callback and schedules a new one on the
    running event loop, so intermediate values are dropped and ``callback``
    sees a value only after ``delay`` seconds without changes. Coroutine
    callbacks are run as tasks.
    """

    def __init__(self, callback: Callable[[T], Any], delay: float = 0.5):
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.callback = callback
        self.delay = delay
        self.value: Optional[T] = None
        self._pending_value: Optional[T] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks = set()

    @property
    def pending(self) -> bool:
        """Whether a value is waiting to be delivered."""
        return self._handle is not None

    def push(self, value: T) -> None:
        """Record a new value and restart the delay."""
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._pending_value = value
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending value without delivering it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending_value = None

    def flush(self) -> None:
        """Deliver the pending value immediately."""
        if self._handle is not None:
            self._handle.cancel()
            self._fire()

    def _fire(self) -> None:
        self._handle = None
        value = self._pending_value
        self._pending_value = None
        self.value = value

        result = self.callback(value)
        if asyncio.iscoroutine(result):
            task = asyncio.get_running_loop().create_task(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: "asyncio.Task") -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Debounced callback failed: {task.exception()}")

    async def wait(self) -> None:
        """Wait for callbacks started by delivered values to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
