"""Pydantic schemas for API requests and responses.

Sub-modules:
- reminder: Reminder creation (tagged medication/appointment variants) and listing
- sms: Ad hoc SMS sends
- utils: Shared config and coercion helpers
"""
# Reminder schemas
from .reminder import (
    MAX_REPEAT_DAYS,
    AppointmentReminderCreate,
    MedicationReminderCreate,
    ReminderCreate,
    ReminderCreateResponse,
    ReminderOut,
)

# SMS schemas
from .sms import (
    SendSMSRequest,
    SendSMSResponse,
    CannedSMSResponse,
)

__all__ = [
    # Reminder
    "MAX_REPEAT_DAYS",
    "AppointmentReminderCreate",
    "MedicationReminderCreate",
    "ReminderCreate",
    "ReminderCreateResponse",
    "ReminderOut",
    # SMS
    "SendSMSRequest",
    "SendSMSResponse",
    "CannedSMSResponse",
]
