"""Trailing-edge debounce for coroutine callbacks.

Only the last call made within the quiet window runs. A call that has
already started is never cancelled; superseded results are filtered by the
caller's request-generation token instead.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    def __init__(self, delay: float, callback: Callable[..., Awaitable[Any]]) -> None:
        self.delay = delay
        self.callback = callback
        self._task: Optional[asyncio.Task] = None
        self._started = False

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, *args: Any) -> None:
        self.cancel()
        self._started = False
        self._task = asyncio.get_running_loop().create_task(self._run(args))

    async def _run(self, args: tuple) -> None:
        await asyncio.sleep(self.delay)
        self._started = True
        try:
            await self.callback(*args)
        except Exception:
            logger.error("debounced_callback_failed", exc_info=True)
            raise

    def cancel(self) -> None:
        """Drop a call still waiting out the quiet window."""
        if self._task is not None and not self._task.done() and not self._started:
            self._task.cancel()

    async def wait(self) -> None:
        """Wait for the most recently scheduled call to finish."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise


__all__ = ["Debouncer"]
