"""Process entry point: ``caresync-server`` / ``python -m caresync.main``.

Exits with status 1 when the reminder store cannot be reached, before the
HTTP server or dispatch loop start.
"""
from __future__ import annotations

import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from caresync.core.config import settings
from caresync.core.logger import init_logging
from caresync.db.session import check_database

logger = logging.getLogger("caresync")


def run() -> None:
    init_logging()
    try:
        check_database()
    except SQLAlchemyError as exc:
        logger.critical("Reminder store connection failed: %s", exc)
        sys.exit(1)
    logger.info("SMS server starting on port %s", settings.PORT)
    logger.info("Endpoints: GET /health, GET|POST /api/reminders, POST /send-sms, POST /test-sms")
    uvicorn.run("caresync.api.main:app", host="0.0.0.0", port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
