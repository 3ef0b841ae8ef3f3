import pytest
from pydantic import ValidationError

from caresync.core import config


def test_test_settings_disable_inprocess_dispatch():
    cfg = config.TestSettings()
    assert cfg.ENV == "test"
    assert cfg.REMINDER_SCHEDULER == "off"
    assert cfg.PORT == 8081


def test_numeric_env_values_coerced_to_text(monkeypatch):
    monkeypatch.setenv("AFRICASTALKING_SHORTCODE", "20880")
    monkeypatch.setenv("TEST_PHONE_NUMBER", "254700000000")
    cfg = config.DevSettings()
    assert cfg.AFRICASTALKING_SHORTCODE == "20880"
    assert cfg.TEST_PHONE_NUMBER == "254700000000"


def test_scheduler_choice_validated(monkeypatch):
    monkeypatch.setenv("REMINDER_SCHEDULER", "CELERY")
    assert config.DevSettings().REMINDER_SCHEDULER == "celery"

    monkeypatch.setenv("REMINDER_SCHEDULER", "cron")
    with pytest.raises(ValidationError):
        config.DevSettings()


def test_production_requires_credentials(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("AFRICASTALKING_API_KEY", raising=False)
    with pytest.raises(ValidationError):
        config.ProdSettings(_env_file=None)

    monkeypatch.setenv("DATABASE_URL", "postgres://user:pw@db/caresync")
    monkeypatch.setenv("AFRICASTALKING_API_KEY", "live-key")
    monkeypatch.setenv("AFRICASTALKING_USERNAME", "sandbox")
    with pytest.raises(ValidationError):
        config.ProdSettings(_env_file=None)

    monkeypatch.setenv("AFRICASTALKING_USERNAME", "caresync")
    cfg = config.ProdSettings(_env_file=None)
    assert cfg.DATABASE_URL == "postgresql://user:pw@db/caresync"
    assert cfg.LOG_FORMAT == "json"


def test_clinic_timezone_validated(monkeypatch):
    assert config.DevSettings().CLINIC_TIMEZONE == "Africa/Nairobi"

    monkeypatch.setenv("CLINIC_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(ValidationError):
        config.DevSettings()
