"""Due-reminder dispatch.

One tick: select unsent reminders whose ``send_at`` has passed, then for each
one normalize the phone, compose the body, hand it to the SMS gateway and flip
``sent`` on success. Records are processed sequentially and a failure on one
never aborts the rest. Failed records stay pending and are picked up again by
the next tick, with no retry ceiling.

Store calls are blocking SQLAlchemy round-trips and run in the threadpool, so
HTTP requests on the same event loop keep being served during a tick.
"""
from __future__ import annotations

import asyncio
import datetime as dt
import logging
import time
from dataclasses import dataclass
from typing import Callable

from starlette.concurrency import run_in_threadpool

from caresync import metrics
from caresync.core.config import settings
from caresync.core.exceptions import PersistenceError
from caresync.models.models import Reminder, utcnow
from caresync.services.message_composer import compose_message
from caresync.services.reminder_store import ReminderStore
from caresync.services.sms_gateway import SMSGateway
from caresync.utils.phone import try_normalize_phone

logger = logging.getLogger(__name__)


@dataclass
class DispatchReport:
    selected: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0
    overlapped: bool = False
    error: str | None = None


class ReminderDispatcher:
    def __init__(
        self,
        store: ReminderStore,
        gateway: SMSGateway,
        sender_id: str | None = None,
        clock: Callable[[], dt.datetime] = utcnow,
        strict_phone: bool | None = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.sender_id = sender_id if sender_id is not None else settings.AFRICASTALKING_SHORTCODE
        self.clock = clock
        self.strict_phone = strict_phone
        self._tick_lock = asyncio.Lock()

    @property
    def tick_in_progress(self) -> bool:
        return self._tick_lock.locked()

    async def run_tick(self, now: dt.datetime | None = None) -> DispatchReport:
        """Run one dispatch pass; a call made while another pass runs is skipped."""
        if self._tick_lock.locked():
            logger.warning("Reminder dispatch tick already in progress; skipping overlapping tick")
            metrics.reminder_dispatch_overlap()
            return DispatchReport(overlapped=True)

        async with self._tick_lock:
            started = time.perf_counter()
            try:
                return await self._run(now or self.clock())
            finally:
                metrics.reminder_dispatch_tick(time.perf_counter() - started)

    async def _run(self, now: dt.datetime) -> DispatchReport:
        report = DispatchReport()
        try:
            due = await run_in_threadpool(self.store.find_due, now)
        except PersistenceError as exc:
            logger.error("Could not load due reminders: %s", exc.message)
            report.error = exc.message
            return report

        report.selected = len(due)
        if due:
            logger.info("Dispatching %d due reminder(s)", len(due))
        for reminder in due:
            outcome = await self._dispatch_one(reminder)
            if outcome == "sent":
                report.sent += 1
            elif outcome == "failed":
                report.failed += 1
            else:
                report.skipped += 1
        if due:
            logger.info(
                "Dispatch tick done: %d sent, %d failed, %d skipped",
                report.sent,
                report.failed,
                report.skipped,
            )
        return report

    async def _dispatch_one(self, reminder: Reminder) -> str:
        if not reminder.phone or not reminder.phone.strip():
            logger.warning("Skipping reminder %s: no phone number", reminder.id)
            metrics.reminder_dispatch_skipped("missing_phone")
            return "skipped"

        destination = try_normalize_phone(reminder.phone, strict=self.strict_phone)
        if destination is None:
            logger.warning("Skipping reminder %s: cannot normalize phone %r", reminder.id, reminder.phone)
            metrics.reminder_dispatch_skipped("invalid_phone")
            return "skipped"

        body = compose_message(reminder)
        result = await self.gateway.send(destination, body, self.sender_id)
        if not result.ok:
            logger.error("Failed to send reminder %s to %s: %s", reminder.id, destination, result.error)
            metrics.reminder_dispatch_failed()
            return "failed"

        try:
            flipped = await run_in_threadpool(self.store.mark_sent, reminder.id, self.clock())
        except PersistenceError as exc:
            # Delivered but not recorded: the next tick will send it again.
            logger.error("Reminder %s sent to %s but could not be marked sent: %s", reminder.id, destination, exc.message)
            metrics.reminder_dispatch_failed()
            return "failed"
        if not flipped:
            logger.warning("Reminder %s was already marked sent by another dispatcher", reminder.id)
        logger.info("Reminder %s sent to %s", reminder.id, destination)
        metrics.reminder_dispatch_sent()
        return "sent"
