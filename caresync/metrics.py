"""Metrics facade.

Service code should ONLY call the semantic helpers here so the backend can
change freely. Counters live in the default prometheus_client registry and are
exposed by ``GET /metrics``.
"""

from __future__ import annotations

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger("metrics")

_REMINDERS_CREATED = Counter("reminders_created_total", "Reminders stored", ["type"])
_DISPATCH_SENT = Counter("reminder_dispatch_sent_total", "Due reminders delivered to the SMS gateway")
_DISPATCH_FAILED = Counter("reminder_dispatch_failed_total", "Due reminders the gateway did not accept")
_DISPATCH_SKIPPED = Counter(
    "reminder_dispatch_skipped_total", "Due reminders skipped before sending", ["reason"]
)
_DISPATCH_TICKS = Counter("reminder_dispatch_ticks_total", "Completed dispatch ticks")
_DISPATCH_OVERLAPS = Counter(
    "reminder_dispatch_overlaps_total", "Ticks skipped because a previous tick was still running"
)
_DISPATCH_TICK_SECONDS = Histogram(
    "reminder_dispatch_tick_seconds",
    "Wall time of one dispatch tick",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60, 120),
)
_DIRECT_SENDS = Counter("sms_direct_sends_total", "Ad hoc SMS sends via the API", ["outcome"])


def reminders_created(reminder_type: str, count: int = 1) -> None:
    _REMINDERS_CREATED.labels(type=reminder_type).inc(count)


def reminder_dispatch_sent() -> None:
    _DISPATCH_SENT.inc()


def reminder_dispatch_failed() -> None:
    _DISPATCH_FAILED.inc()


def reminder_dispatch_skipped(reason: str) -> None:
    _DISPATCH_SKIPPED.labels(reason=reason).inc()


def reminder_dispatch_tick(duration_seconds: float) -> None:
    _DISPATCH_TICKS.inc()
    _DISPATCH_TICK_SECONDS.observe(duration_seconds)
    if duration_seconds > 30:
        logger.warning("Slow reminder dispatch tick: %.1fs", duration_seconds)


def reminder_dispatch_overlap() -> None:
    _DISPATCH_OVERLAPS.inc()


def sms_direct_send(outcome: str) -> None:
    _DIRECT_SENDS.labels(outcome=outcome).inc()
