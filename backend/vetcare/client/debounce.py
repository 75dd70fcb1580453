"""Module: debounce."""

import asyncio
import inspect
from typing import Any, Callable

DEFAULT_DELAY = 0.5


class Debouncer:
    """
    Delay a callback until input settles.

    Each ``push`` bumps a generation counter and restarts the timer; a timer
    only fires if its generation is still the latest, so only the last value
    within ``delay`` seconds reaches the callback.
    """

    def __init__(self, callback: Callable[[Any], Any], delay: float = DEFAULT_DELAY) -> None:
        self.callback = callback
        self.delay = delay
        self._generation = 0
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def push(self, value: Any) -> None:
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(self._generation, value))

    def cancel(self) -> None:
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def wait(self) -> None:
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    async def _fire(self, generation: int, value: Any) -> None:
        await asyncio.sleep(self.delay)
        if generation != self._generation:
            return
        result = self.callback(value)
        if inspect.isawaitable(result):
            await result
