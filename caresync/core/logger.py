from __future__ import annotations

import json
import logging
import re
import sys
from typing import Any

from caresync.core.config import settings

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}

# Recipient numbers: 9-15 contiguous digits, or "0712 345 678" style groups.
_PHONE_PATTERN = re.compile(r"\+?\d{9,15}\b|\+?\d{3,4}[\s\-]\d{3}[\s\-]\d{3}(?:[\s\-]\d{3})?")
_VISIBLE_DIGITS = 3


def redact_phones(text: str) -> str:
    """Mask phone numbers, keeping the last few digits so log lines stay correlatable."""

    def _mask(match: re.Match[str]) -> str:
        digits = re.sub(r"\D", "", match.group(0))
        return "***" + digits[-_VISIBLE_DIGITS:]

    return _PHONE_PATTERN.sub(_mask, text)


class RedactingFormatter(logging.Formatter):
    """Masks phone numbers in the fully rendered line, tracebacks and extras included."""

    def __init__(self, inner: logging.Formatter) -> None:
        super().__init__()
        self.inner = inner

    def format(self, record: logging.LogRecord) -> str:
        return redact_phones(self.inner.format(record))


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - formatting logic
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "service": settings.APP_NAME,
            "env": settings.ENV,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if not key.startswith("_") and key not in _RESERVED_ATTRS and key not in payload
        }
        if extra:
            payload["extra"] = extra
        return json.dumps(payload, default=str)


def init_logging(level: int | None = None) -> None:
    """Configure the root logger once per process; later calls are no-ops."""
    root = logging.getLogger()
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    formatter: logging.Formatter
    if settings.LOG_FORMAT.lower() == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    if settings.LOG_REDACT_PHONES:
        formatter = RedactingFormatter(formatter)
    handler.setFormatter(formatter)
    root.setLevel(level or getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root.addHandler(handler)
    # httpx logs every request at INFO, which would echo gateway URLs on each tick
    logging.getLogger("httpx").setLevel(logging.WARNING)
