from __future__ import annotations

import datetime as dt
import enum
import uuid
from dataclasses import dataclass

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from caresync.db.base_class import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: dt.datetime) -> dt.datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def new_reminder_id() -> str:
    return uuid.uuid4().hex


class UTCDateTime(TypeDecorator):
    """Timestamp stored as UTC and always returned timezone-aware.

    SQLite drops tzinfo on round-trip; normalizing on both sides keeps
    ``send_at <= now`` comparisons consistent across backends.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return as_utc(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return as_utc(value)


class ReminderType(str, enum.Enum):
    MEDICATION = "medication"
    APPOINTMENT = "appointment"


@dataclass(frozen=True)
class MedicationDetails:
    medication: str


@dataclass(frozen=True)
class AppointmentDetails:
    doctor_name: str | None = None
    clinic_name: str | None = None
    appointment_date: dt.date | None = None
    appointment_time: str | None = None


ReminderDetails = MedicationDetails | AppointmentDetails


class Reminder(Base):
    """A scheduled SMS reminder for a single recipient."""

    __table_args__ = (
        CheckConstraint(
            "type != 'medication' OR (doctor_name IS NULL AND clinic_name IS NULL "
            "AND appointment_date IS NULL AND appointment_time IS NULL)",
            name="medication_fields_only",
        ),
        CheckConstraint(
            "type != 'appointment' OR medication IS NULL",
            name="appointment_fields_only",
        ),
        Index("ix_reminder_due", "sent", "send_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_reminder_id)
    name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)
    type: Mapped[ReminderType] = mapped_column(
        Enum(
            ReminderType,
            name="remindertype",
            native_enum=False,
            length=20,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        default=ReminderType.MEDICATION,
    )
    medication: Mapped[str | None] = mapped_column(Text, nullable=True)
    doctor_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    clinic_name: Mapped[str | None] = mapped_column(String(160), nullable=True)
    appointment_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    appointment_time: Mapped[str | None] = mapped_column(String(40), nullable=True)
    send_at: Mapped[dt.datetime] = mapped_column(UTCDateTime(), nullable=False)
    sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sent_at: Mapped[dt.datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)

    @property
    def details(self) -> ReminderDetails:
        """Variant-specific fields; the only view the composer and API should use."""
        if self.type == ReminderType.MEDICATION:
            return MedicationDetails(medication=self.medication or "")
        if self.type == ReminderType.APPOINTMENT:
            return AppointmentDetails(
                doctor_name=self.doctor_name,
                clinic_name=self.clinic_name,
                appointment_date=self.appointment_date,
                appointment_time=self.appointment_time,
            )
        raise ValueError(f"Unsupported reminder type: {self.type!r}")

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"<Reminder id={self.id} type={self.type.value} send_at={self.send_at} sent={self.sent}>"
