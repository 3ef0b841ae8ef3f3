"""Reminder request/response schemas."""
from __future__ import annotations

import datetime as dt
from typing import Annotated, Any, Literal, Union
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

from caresync.core.config import settings
from caresync.models.models import ReminderType, as_utc

from .utils import CAMEL_CONFIG, blank_to_none, coerce_to_str

MAX_REPEAT_DAYS = 365


class _ReminderCreateBase(BaseModel):
    model_config = ConfigDict(**CAMEL_CONFIG, extra="forbid", str_strip_whitespace=True)

    name: str | None = Field(default=None, max_length=120)
    phone: str = Field(..., min_length=1, max_length=40)
    send_at: dt.datetime
    repeat_days: int = Field(default=1, ge=1, le=MAX_REPEAT_DAYS)

    @field_validator("phone", mode="before")
    @classmethod
    def _phone_as_text(cls, v):
        return coerce_to_str(v)

    @field_validator("name", mode="before")
    @classmethod
    def _blank_name(cls, v):
        return blank_to_none(v)

    @field_validator("send_at")
    @classmethod
    def _send_at_utc(cls, v: dt.datetime) -> dt.datetime:
        return as_utc(v)


class MedicationReminderCreate(_ReminderCreateBase):
    type: Literal["medication"] = "medication"
    medication: str = Field(..., min_length=1)


class AppointmentReminderCreate(_ReminderCreateBase):
    type: Literal["appointment"] = "appointment"
    doctor_name: str | None = Field(default=None, max_length=120)
    clinic_name: str | None = Field(default=None, max_length=160)
    appointment_date: dt.date
    appointment_time: str | None = Field(default=None, max_length=40)

    @field_validator("doctor_name", "clinic_name", "appointment_time", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return blank_to_none(v)

    @field_validator("appointment_date", mode="before")
    @classmethod
    def _date_from_timestamp(cls, v):
        # Clients frequently send a full ISO timestamp for the appointment day,
        # e.g. local midnight serialized as UTC by JS toISOString().
        if isinstance(v, str) and "T" in v:
            v = dt.datetime.fromisoformat(v.replace("Z", "+00:00"))
        if isinstance(v, dt.datetime):
            if v.tzinfo is not None:
                v = v.astimezone(ZoneInfo(settings.CLINIC_TIMEZONE))
            return v.date()
        return v


def _reminder_type_tag(value: Any) -> str:
    """Pick the variant; bodies without ``type`` are medication reminders."""
    if isinstance(value, dict):
        return value.get("type") or ReminderType.MEDICATION.value
    return getattr(value, "type", ReminderType.MEDICATION.value)


ReminderCreate = Annotated[
    Union[
        Annotated[MedicationReminderCreate, Tag("medication")],
        Annotated[AppointmentReminderCreate, Tag("appointment")],
    ],
    Discriminator(
        _reminder_type_tag,
        custom_error_type="invalid_reminder_type",
        custom_error_message="type must be 'medication' or 'appointment'",
    ),
]


class ReminderOut(BaseModel):
    model_config = ConfigDict(**CAMEL_CONFIG, from_attributes=True)

    id: str
    name: str | None = None
    phone: str
    type: ReminderType
    medication: str | None = None
    doctor_name: str | None = None
    clinic_name: str | None = None
    appointment_date: dt.date | None = None
    appointment_time: str | None = None
    send_at: dt.datetime
    sent: bool
    sent_at: dt.datetime | None = None
    created_at: dt.datetime | None = None


class ReminderCreateResponse(BaseModel):
    success: bool
    message: str
    data: list[ReminderOut] | None = None
