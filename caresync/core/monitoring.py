"""Optional Sentry error reporting for the API process and the Celery worker."""
import logging

from caresync.core.config import settings
from caresync.core.logger import redact_phones

logger = logging.getLogger(__name__)

_initialized = False


def _scrub_event(event, hint):
    """Drop recipient numbers from messages before the event leaves the process."""
    if event.get("message"):
        event["message"] = redact_phones(event["message"])
    log_entry = event.get("logentry") or {}
    if log_entry.get("message"):
        log_entry["message"] = redact_phones(log_entry["message"])
    for exc in (event.get("exception") or {}).get("values") or []:
        if exc.get("value"):
            exc["value"] = redact_phones(exc["value"])
    return event


def init_monitoring() -> None:
    global _initialized
    if _initialized:
        return
    _initialized = True
    if not settings.SENTRY_DSN:
        return
    try:
        import sentry_sdk
        from sentry_sdk.integrations.celery import CeleryIntegration
        from sentry_sdk.integrations.fastapi import FastApiIntegration

        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[FastApiIntegration(), CeleryIntegration()],
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            environment=settings.ENV,
            release=f"caresync-sms@{settings.ENV}",
            send_default_pii=False,
            before_send=_scrub_event,
        )
        logger.info("Sentry initialized (env=%s)", settings.ENV)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to init Sentry: %s", exc)
