from __future__ import annotations

from celery import Celery

from caresync.core.config import settings

REMINDER_QUEUE = "reminders"


def _create_celery() -> Celery:
    celery = Celery(
        "caresync",
        broker=settings.REDIS_URL,
        backend=settings.REDIS_URL,
        include=["caresync.workers.tasks"],
    )
    celery.conf.update(
        task_default_queue="default",
        task_serializer="json",
        result_serializer="json",
        accept_content=["json"],
        timezone="UTC",
        enable_utc=True,
        task_always_eager=settings.ENV.lower() in {"test"},
        task_routes={"reminders.*": {"queue": REMINDER_QUEUE}},
    )
    # Beat only drives dispatch when the in-process loop is disabled; running both would double-send.
    if settings.REMINDER_SCHEDULER == "celery" and settings.ENV.lower() not in {"test"}:
        celery.conf.beat_schedule = {
            "dispatch-due-reminders": {
                "task": "reminders.dispatch_due",
                "schedule": float(settings.REMINDER_DISPATCH_INTERVAL_SECONDS),
                # A tick that waited longer than one interval is stale; the next one covers it.
                "options": {"expires": settings.REMINDER_DISPATCH_INTERVAL_SECONDS},
            }
        }
    return celery


celery_app = _create_celery()
