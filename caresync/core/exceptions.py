"""Custom exception hierarchy for CareSync.

Every error the API can surface derives from ``CareSyncException`` so a single
handler can render it. Error codes follow the pattern [CATEGORY][NUMBER]:

- REM: Reminder errors (001-099)
- SMS: Phone / SMS errors (100-199)
- SYS: System errors (400-499)
"""

from __future__ import annotations

from typing import Any


class CareSyncException(Exception):
    """Base exception for all CareSync application errors."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with a client-facing message and metadata.

        Args:
            message: Human readable error message
            code: Unique error code (e.g., "REM001")
            status_code: HTTP status code (default: 400 Bad Request)
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


# ============================================================================
# REMINDER ERRORS (REM001-099)
# ============================================================================

class ReminderError(CareSyncException):
    """Base class for reminder-related errors."""
    pass


class ReminderValidationError(ReminderError):
    """A required reminder field is missing or malformed."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"Invalid reminder field '{field}': {reason}",
            code="REM001",
            status_code=400,
            details={"field": field, "reason": reason},
        )


# ============================================================================
# PHONE / SMS ERRORS (SMS100-199)
# ============================================================================

class SMSError(CareSyncException):
    """Base class for phone and SMS errors."""
    pass


class InvalidPhoneNumberError(SMSError):
    """Phone number cannot be put into dialable international form."""

    def __init__(self, phone: str | None, reason: str = "Invalid Kenya phone number format"):
        super().__init__(
            message=reason,
            code="SMS100",
            status_code=400,
            details={"phone": phone},
        )


# ============================================================================
# SYSTEM ERRORS (SYS400-499)
# ============================================================================

class SystemError(CareSyncException):
    """Base class for system/infrastructure errors."""
    pass


class PersistenceError(SystemError):
    """The reminder store is unreachable or rejected a write."""

    def __init__(self, operation: str, reason: str | None = None):
        message = f"Reminder store failed during {operation}"
        super().__init__(
            message=message,
            code="SYS400",
            status_code=500,
            details={"operation": operation, "reason": reason},
        )


