"""In-process timer that drives the reminder dispatcher.

Ticks fire at a fixed rate. A tick that overruns the interval delays the next
one instead of running alongside it, since each tick is awaited before the
next is scheduled.
"""
from __future__ import annotations

import asyncio
import logging

from caresync.services.reminder_dispatcher import ReminderDispatcher

logger = logging.getLogger(__name__)


class DispatchLoop:
    def __init__(self, dispatcher: ReminderDispatcher, interval_seconds: float = 60) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.dispatcher = dispatcher
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="reminder-dispatch-loop")
        logger.info("Reminder dispatch loop started (every %ss)", self.interval_seconds)

    async def stop(self) -> None:
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Reminder dispatch loop stopped")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_fire = loop.time()
        while True:
            next_fire += self.interval_seconds
            try:
                await self.dispatcher.run_tick()
            except asyncio.CancelledError:
                raise
            except Exception:  # noqa: BLE001 - the loop must outlive a bad tick
                logger.exception("Reminder dispatch tick crashed")
            delay = next_fire - loop.time()
            if delay < 0:
                logger.warning("Reminder dispatch tick overran the interval by %.1fs", -delay)
                next_fire = loop.time()
                delay = 0
            await asyncio.sleep(delay)
