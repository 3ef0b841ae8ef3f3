import datetime as dt

from caresync.models import schemas
from caresync.services.reminder_dispatcher import ReminderDispatcher
from caresync.workers import celery_app as celery_module
from caresync.workers.tasks import reminder_tasks


def test_celery_configured_for_tests():
    conf = celery_module.celery_app.conf
    assert conf.task_always_eager is True
    assert conf.task_routes["reminders.*"]["queue"] == celery_module.REMINDER_QUEUE
    assert not conf.beat_schedule


def test_dispatch_task_runs_one_tick(store, fake_gateway, monkeypatch):
    store.create(
        schemas.MedicationReminderCreate(
            name="Jane",
            phone="0712345678",
            send_at=dt.datetime.now(dt.timezone.utc) - dt.timedelta(minutes=1),
            medication="Metformin 500mg",
        )
    )
    monkeypatch.setattr(reminder_tasks, "_dispatcher", ReminderDispatcher(store=store, gateway=fake_gateway))

    result = reminder_tasks.dispatch_due_reminders.apply().get()

    assert result["selected"] == 1
    assert result["sent"] == 1
    assert result["overlapped"] is False
    assert fake_gateway.calls[0][0] == "+254712345678"


def test_get_dispatcher_is_process_singleton(monkeypatch):
    monkeypatch.setattr(reminder_tasks, "_dispatcher", None)
    first = reminder_tasks.get_dispatcher()
    assert reminder_tasks.get_dispatcher() is first
