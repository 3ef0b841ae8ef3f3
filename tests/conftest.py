from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")

from collections import deque  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from caresync.core.config import settings  # noqa: E402
from caresync.db import session as db_session_module  # noqa: E402
from caresync.db.base_class import Base  # noqa: E402
from caresync.db.session import SessionLocal  # noqa: E402
from caresync.models import models  # noqa: E402,F401 - register tables
from caresync.services.reminder_store import ReminderStore  # noqa: E402
from caresync.services.sms_gateway import SMSResult  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")


test_engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Ensure application code uses the test engine
settings.DATABASE_URL = TEST_DATABASE_URL  # type: ignore[attr-defined]
settings.ENV = "test"  # type: ignore[attr-defined]
db_session_module.engine = test_engine  # type: ignore[assignment]
SessionLocal.configure(bind=test_engine)


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Ensure each test sees a fresh database schema."""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield


class FakeGateway:
    """Records sends and replays queued results (success when the queue is empty)."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str | None]] = []
        self.results: deque[SMSResult] = deque()

    def queue(self, *results: SMSResult) -> None:
        self.results.extend(results)

    async def send(self, destination: str, body: str, sender_id: str | None = None) -> SMSResult:
        self.calls.append((destination, body, sender_id))
        if self.results:
            return self.results.popleft()
        return SMSResult(
            status="success",
            raw={
                "SMSMessageData": {
                    "Message": "Sent to 1/1 Total Cost: KES 0.8000",
                    "Recipients": [
                        {
                            "statusCode": 101,
                            "number": destination,
                            "status": "Success",
                            "cost": "KES 0.8000",
                            "messageId": f"ATXid_{len(self.calls)}",
                        }
                    ],
                }
            },
        )


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture
def store() -> ReminderStore:
    return ReminderStore(SessionLocal)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def client(store, fake_gateway):
    """FastAPI TestClient with the store and gateway swapped for test doubles."""
    from caresync.api.main import app

    previous = (app.state.reminder_store, app.state.sms_gateway)
    app.state.reminder_store = store
    app.state.sms_gateway = fake_gateway
    try:
        yield TestClient(app)
    finally:
        app.state.reminder_store, app.state.sms_gateway = previous
