"""Database engine setup.

Reminders live in a single relational table. SQLite is used for local
development and tests; PostgreSQL in production.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from caresync.core.config import settings

logger = logging.getLogger(__name__)


def _build_engine(raw_url: str) -> Engine:
    url = make_url(raw_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(raw_url, future=True, connect_args={"check_same_thread": False})
    return create_engine(
        raw_url,
        future=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_pre_ping=True,  # Verify connection health before use
    )


engine = _build_engine(settings.DATABASE_URL or "sqlite:///./storage/dev.db")
SessionLocal = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_database() -> None:
    """Run a trivial query; raises ``sqlalchemy.exc.SQLAlchemyError`` when the store is unreachable."""
    with session_scope() as db:
        db.execute(text("SELECT 1"))


def init_db() -> None:
    """Create missing tables outside production (production relies on Alembic)."""
    from caresync.db.base_class import Base
    from caresync.models import models  # noqa: F401 - register tables on the metadata

    if settings.ENV.lower() == "prod":
        return
    bind = SessionLocal.kw.get("bind") or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ensured on %s", bind.url.render_as_string(hide_password=True))
