"""Persistence for reminders.

Each operation opens its own short-lived session, so one store instance can be
shared by request handlers and the dispatch loop. There is no cross-record
transaction: ``find_due`` followed by ``mark_sent`` is two separate statements.
"""
from __future__ import annotations

import datetime as dt
import logging
from contextlib import contextmanager
from typing import Callable, Generator

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from caresync.core.exceptions import PersistenceError, ReminderValidationError
from caresync.models import schemas
from caresync.models.models import Reminder, ReminderType, as_utc, utcnow

logger = logging.getLogger(__name__)

REPEAT_INTERVAL = dt.timedelta(hours=24)
DEFAULT_LIST_LIMIT = 100


class ReminderStore:
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Generator[Session, None, None]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Reminder store %s failed: %s", operation, exc)
            raise PersistenceError(operation, str(exc)) from exc
        finally:
            db.close()

    @staticmethod
    def _build(payload: schemas.MedicationReminderCreate | schemas.AppointmentReminderCreate, send_at: dt.datetime) -> Reminder:
        reminder = Reminder(name=payload.name, phone=payload.phone, send_at=send_at, sent=False)
        if isinstance(payload, schemas.MedicationReminderCreate):
            reminder.type = ReminderType.MEDICATION
            reminder.medication = payload.medication
        elif isinstance(payload, schemas.AppointmentReminderCreate):
            reminder.type = ReminderType.APPOINTMENT
            reminder.doctor_name = payload.doctor_name
            reminder.clinic_name = payload.clinic_name
            reminder.appointment_date = payload.appointment_date
            reminder.appointment_time = payload.appointment_time
        else:
            raise ReminderValidationError("type", f"unsupported reminder payload {type(payload).__name__}")
        return reminder

    def create(
        self,
        payload: schemas.MedicationReminderCreate | schemas.AppointmentReminderCreate,
    ) -> list[Reminder]:
        """Persist one reminder per repeat day, each 24 hours after the previous."""
        first = as_utc(payload.send_at)
        rows = [self._build(payload, first + REPEAT_INTERVAL * day) for day in range(payload.repeat_days)]
        with self._session("create") as db:
            db.add_all(rows)
            db.flush()
        logger.info(
            "Stored %d %s reminder(s) starting %s",
            len(rows),
            rows[0].type.value,
            first.isoformat(),
        )
        return rows

    def get(self, reminder_id: str) -> Reminder | None:
        with self._session("get") as db:
            return db.get(Reminder, reminder_id)

    def list_reminders(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Reminder]:
        """Newest ``send_at`` first."""
        stmt = select(Reminder).order_by(Reminder.send_at.desc(), Reminder.created_at.desc()).limit(limit)
        with self._session("list") as db:
            return list(db.execute(stmt).scalars())

    def find_due(self, now: dt.datetime | None = None, limit: int | None = None) -> list[Reminder]:
        """Unsent reminders whose ``send_at`` is not after ``now`` (store order)."""
        cutoff = as_utc(now) if now else utcnow()
        stmt = select(Reminder).where(Reminder.sent.is_(False)).where(Reminder.send_at <= cutoff)
        if limit:
            stmt = stmt.limit(limit)
        with self._session("find_due") as db:
            return list(db.execute(stmt).scalars())

    def mark_sent(self, reminder_id: str, sent_at: dt.datetime | None = None) -> bool:
        """Flip ``sent``; returns False when the row was already sent or is gone."""
        stmt = (
            update(Reminder)
            .where(Reminder.id == reminder_id)
            .where(Reminder.sent.is_(False))
            .values(sent=True, sent_at=as_utc(sent_at) if sent_at else utcnow())
        )
        with self._session("mark_sent") as db:
            result = db.execute(stmt)
            return result.rowcount == 1
