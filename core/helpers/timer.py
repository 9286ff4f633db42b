"""Interval timer for the dashboard's background loops.

Each firing runs as its own task, so a slow or failing firing never
delays or cancels the next one (same cadence semantics as a browser
setInterval).
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Optional, Set, Union

from core.logging_utils import get_logger

logger = get_logger(__name__)

TimerCallback = Callable[[], Union[None, Awaitable[None]]]


class PeriodicTimer:
    """Fires ``callback`` every ``interval_s`` seconds on the running loop."""

    def __init__(
        self,
        name: str,
        interval_s: float,
        callback: TimerCallback,
        run_immediately: bool = False,
    ):
        if interval_s <= 0:
            raise ValueError(f"interval_s must be positive, got {interval_s}")
        self.name = name
        self.interval_s = interval_s
        self.callback = callback
        self.run_immediately = run_immediately

        self._running = False
        self._task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

        # Stats
        self.fired = 0
        self.errors = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def start(self):
        """Schedule the timer loop. Must be called with a running event loop."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop(), name=f"timer:{self.name}")
        logger.info("[TIMER] %s started (every %.1fs)", self.name, self.interval_s)

    async def stop(self):
        """Cancel the loop and any in-flight firings (process teardown only)."""
        self._running = False
        tasks = [t for t in (self._task, *self._inflight) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._task = None
        self._inflight.clear()

    async def _loop(self):
        if self.run_immediately:
            self._fire()
        while self._running:
            await asyncio.sleep(self.interval_s)
            if not self._running:
                break
            self._fire()

    def _fire(self):
        self.fired += 1
        task = asyncio.create_task(self._guarded(), name=f"timer:{self.name}:{self.fired}")
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _guarded(self):
        try:
            result = self.callback()
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.errors += 1
            logger.warning("[TIMER] %s firing failed: %s", self.name, e, exc_info=True)
