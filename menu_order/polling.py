"""Cancellable periodic refresh tied to a screen's lifetime."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from menu_order.config import POLL_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run an async callback on a fixed period until stopped.

    Runs never overlap: a slow run delays the next tick instead of stacking
    requests, so the last completed run is always the newest data. Stopping
    cancels an in-flight run so nothing lands on a torn-down screen.
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[None]],
        interval: float = POLL_INTERVAL_SECONDS,
        name: str = "poll",
        run_immediately: bool = True,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.callback = callback
        self.interval = interval
        self.name = name
        self.run_immediately = run_immediately
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.debug("Periodic task %s started (every %.1fs)", self.name, self.interval)

    def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.debug("Periodic task %s stopped", self.name)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_run = loop.time()
        if not self.run_immediately:
            next_run += self.interval
            await asyncio.sleep(self.interval)

        while True:
            try:
                await self.callback()
            except Exception:
                logger.exception("Periodic task %s failed", self.name)

            next_run += self.interval
            now = loop.time()
            # Skip ticks missed while a run was slow.
            while next_run < now:
                next_run += self.interval
            await asyncio.sleep(next_run - now)
