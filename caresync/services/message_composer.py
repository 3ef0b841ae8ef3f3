"""SMS body templates for due reminders."""
from __future__ import annotations

import datetime as dt
import logging

from caresync.core.config import settings
from caresync.models.models import AppointmentDetails, MedicationDetails, Reminder

logger = logging.getLogger(__name__)

DEFAULT_GREETING_NAME = "there"


def format_appointment_date(value: dt.date) -> str:
    """Long weekday/month/day form, e.g. ``Wednesday, October 21``."""
    return f"{value:%A}, {value:%B} {value.day}"


def _greeting_name(name: str | None) -> str:
    return name.strip() if name and name.strip() else DEFAULT_GREETING_NAME


def compose_medication_message(name: str | None, details: MedicationDetails) -> str:
    return f"Hi {_greeting_name(name)}, this is your reminder to take: {details.medication}."


def compose_appointment_message(
    name: str | None,
    details: AppointmentDetails,
    reply_keyword: str | None = None,
) -> str:
    parts = [f"Hi {_greeting_name(name)}, this is a reminder of your appointment"]
    if details.doctor_name:
        parts.append(f"with {details.doctor_name}")
    if details.appointment_date:
        parts.append(f"on {format_appointment_date(details.appointment_date)}")
    if details.appointment_time:
        parts.append(f"at {details.appointment_time}")
    if details.clinic_name:
        parts.append(f"at {details.clinic_name}")
    body = " ".join(parts) + "."
    keyword = settings.APPOINTMENT_REPLY_KEYWORD if reply_keyword is None else reply_keyword
    if keyword:
        body += f" Reply {keyword} to confirm."
    return body


def compose_message(reminder: Reminder) -> str:
    """Render the SMS body for a due reminder."""
    try:
        details = reminder.details
    except ValueError:
        logger.warning("Reminder %s has unsupported type %r; using fallback body", reminder.id, reminder.type)
        details = None

    if isinstance(details, MedicationDetails):
        return compose_medication_message(reminder.name, details)
    if isinstance(details, AppointmentDetails):
        return compose_appointment_message(reminder.name, details)
    return f"Hi {_greeting_name(reminder.name)}, you have a reminder from CareSync."


def compose_direct_message(message: str, name: str | None = None) -> str:
    """Body for ad hoc sends: greet by name when one is given."""
    if name and name.strip():
        return f"Hi {name.strip()}, {message}"
    return message
