"""Phone number normalization for Kenyan mobile numbers.

Examples (country code 254):
    "0712 345-678"   → "+254712345678"
    "254712345678"   → "+254712345678"
    "+254712345678"  → "+254712345678"
    "712345678"      → "+254712345678"

In strict mode the result must be a Kenyan mobile number: the country code,
a mobile operator prefix digit (1 or 7) and 8 further digits.
"""
from __future__ import annotations

import logging
import re

from caresync.core.config import settings
from caresync.core.exceptions import InvalidPhoneNumberError

logger = logging.getLogger(__name__)

TRUNK_PREFIX = "0"
_STRIP_CHARS = re.compile(r"[\s\-()]")


def _strict_pattern(country_code: str) -> re.Pattern[str]:
    return re.compile(rf"^\+{re.escape(country_code)}[17]\d{{8}}$")


def normalize_phone(
    raw: str | int | None,
    *,
    country_code: str | None = None,
    strict: bool | None = None,
) -> str:
    """Return the number in ``+<country code><subscriber>`` form.

    Raises:
        InvalidPhoneNumberError: empty input, or strict validation failed.
    """
    code = country_code or settings.PHONE_COUNTRY_CODE
    strict = settings.PHONE_STRICT_VALIDATION if strict is None else strict

    if raw is None:
        raise InvalidPhoneNumberError(None, "Phone number is required")
    phone = _STRIP_CHARS.sub("", str(raw).strip())
    if not phone:
        raise InvalidPhoneNumberError(str(raw), "Phone number is required")

    if phone.startswith(f"+{code}"):
        formatted = phone
    elif phone.startswith(TRUNK_PREFIX):
        formatted = f"+{code}{phone[1:]}"
    elif phone.startswith(code):
        formatted = f"+{phone}"
    else:
        formatted = f"+{code}{phone}"

    if strict and not _strict_pattern(code).match(formatted):
        raise InvalidPhoneNumberError(str(raw))
    return formatted


def try_normalize_phone(raw: str | int | None, **kwargs) -> str | None:
    """Like ``normalize_phone`` but returns None instead of raising."""
    try:
        return normalize_phone(raw, **kwargs)
    except InvalidPhoneNumberError as exc:
        logger.debug("Phone rejected: %r (%s)", raw, exc.message)
        return None
