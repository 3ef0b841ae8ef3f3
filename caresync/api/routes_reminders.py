"""Reminder endpoints.

- GET  /api/reminders              - list reminders, newest sendAt first
- POST /api/reminders              - create (type defaults to medication)
- POST /api/reminders/medication   - create a medication reminder
- POST /api/reminders/appointment  - create an appointment reminder

Every create accepts ``repeatDays``: that many reminders are stored, one per
day, each 24 hours after the previous.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Query

from caresync import metrics
from caresync.api.dependencies import StoreDep
from caresync.models import schemas

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reminders", tags=["reminders"])


def _create(
    store: StoreDep,
    payload: schemas.MedicationReminderCreate | schemas.AppointmentReminderCreate,
) -> schemas.ReminderCreateResponse:
    rows = store.create(payload)
    metrics.reminders_created(payload.type, len(rows))
    message = "Reminder saved." if len(rows) == 1 else f"{len(rows)} reminders saved."
    return schemas.ReminderCreateResponse(
        success=True,
        message=message,
        data=[schemas.ReminderOut.model_validate(row) for row in rows],
    )


@router.get("", response_model=list[schemas.ReminderOut])
def list_reminders(
    store: StoreDep,
    limit: int = Query(default=100, ge=1, le=1000),
):
    return store.list_reminders(limit=limit)


@router.post("", response_model=schemas.ReminderCreateResponse)
def create_reminder(payload: schemas.ReminderCreate, store: StoreDep):
    return _create(store, payload)


@router.post("/medication", response_model=schemas.ReminderCreateResponse)
def create_medication_reminder(payload: schemas.MedicationReminderCreate, store: StoreDep):
    return _create(store, payload)


@router.post("/appointment", response_model=schemas.ReminderCreateResponse)
def create_appointment_reminder(payload: schemas.AppointmentReminderCreate, store: StoreDep):
    return _create(store, payload)
