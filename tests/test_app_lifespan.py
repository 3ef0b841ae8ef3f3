import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from caresync.api import main as api_main
from caresync.core.config import settings


def test_inprocess_scheduler_starts_and_stops_loop(store, fake_gateway, monkeypatch):
    monkeypatch.setattr(settings, "REMINDER_SCHEDULER", "inprocess")
    monkeypatch.setattr(settings, "REMINDER_DISPATCH_INTERVAL_SECONDS", 3600)
    app = api_main.create_app(store=store, gateway=fake_gateway)

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        dispatcher = app.state.dispatcher
        assert dispatcher.store is store
        assert dispatcher.gateway is fake_gateway


def test_scheduler_off_skips_loop(store, fake_gateway):
    app = api_main.create_app(store=store, gateway=fake_gateway)

    with TestClient(app):
        assert not hasattr(app.state, "dispatcher")


def test_startup_fails_when_store_unreachable(store, fake_gateway, monkeypatch):
    def unreachable():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(api_main, "check_database", unreachable)
    app = api_main.create_app(store=store, gateway=fake_gateway)

    with pytest.raises(RuntimeError):
        with TestClient(app):
            pass


def test_run_exits_when_store_unreachable(monkeypatch):
    from caresync import main as entrypoint

    def unreachable():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    started = []
    monkeypatch.setattr(entrypoint, "check_database", unreachable)
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda *a, **kw: started.append(a))

    with pytest.raises(SystemExit) as exc_info:
        entrypoint.run()
    assert exc_info.value.code == 1
    assert started == []
