"""
Reminder Tasks.

Celery entry point for the dispatch tick when ``REMINDER_SCHEDULER=celery``.
Consume the ``reminders`` queue with a single worker process so ticks never
overlap.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict
from typing import Any

from caresync.db.session import SessionLocal
from caresync.services.reminder_dispatcher import ReminderDispatcher
from caresync.services.reminder_store import ReminderStore
from caresync.services.sms_gateway import build_gateway
from caresync.workers.celery_app import celery_app

logger = logging.getLogger(__name__)

_dispatcher: ReminderDispatcher | None = None


def get_dispatcher() -> ReminderDispatcher:
    """One dispatcher per worker process, so its tick guard is shared by every task run."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = ReminderDispatcher(store=ReminderStore(SessionLocal), gateway=build_gateway())
    return _dispatcher


@celery_app.task(name="reminders.dispatch_due", ignore_result=False)
def dispatch_due_reminders() -> dict[str, Any]:
    """Run one dispatch tick. No autoretry: unsent reminders are retried by the next beat."""
    report = asyncio.run(get_dispatcher().run_tick())
    if report.error:
        logger.warning("Reminder dispatch task finished with error: %s", report.error)
    return asdict(report)
