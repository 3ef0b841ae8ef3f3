from __future__ import annotations

import datetime as dt
import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from caresync.db.session import get_db

router = APIRouter(tags=["health"])


def _check_db(db: Session) -> bool:
    db.execute(text("SELECT 1"))
    return True


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check (no dependencies)."""
    return {
        "status": "SMS Server is running",
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
    }


@router.get("/ready")
def ready(db: Annotated[Session, Depends(get_db)]) -> dict[str, object]:
    """Readiness check: the reminder store must answer."""
    start = time.time()
    try:
        db_ok = _check_db(db)
    except Exception:  # noqa: BLE001
        db_ok = False
    duration_ms = int((time.time() - start) * 1000)
    if not db_ok:
        raise HTTPException(status_code=503, detail={"db": db_ok, "latency_ms": duration_ms})
    return {"status": "ready", "db": db_ok, "latency_ms": duration_ms}
