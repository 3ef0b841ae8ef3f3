from __future__ import annotations

import os
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "CareSync SMS"
    ENV: str = "dev"
    PORT: int = 8081
    DATABASE_URL: str | None = None

    # Africa's Talking SMS gateway
    AFRICASTALKING_API_KEY: str | None = None
    AFRICASTALKING_USERNAME: str = "sandbox"
    AFRICASTALKING_SHORTCODE: str | None = None  # Sender id; provider default when unset
    SMS_TIMEOUT_SECONDS: float = 10.0
    TEST_PHONE_NUMBER: str = "+254712345678"

    # Phone normalization
    PHONE_COUNTRY_CODE: str = "254"
    PHONE_STRICT_VALIDATION: bool = True

    # Reminder dispatch
    REMINDER_DISPATCH_INTERVAL_SECONDS: int = 60
    REMINDER_SCHEDULER: str = "inprocess"  # Options: inprocess, celery, off
    APPOINTMENT_REPLY_KEYWORD: str = "YES"
    CLINIC_TIMEZONE: str = "Africa/Nairobi"  # Calendar day of timestamped appointment dates

    REDIS_URL: str = "redis://localhost:6379/0"
    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"
    LOG_REDACT_PHONES: bool = False
    SENTRY_DSN: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @field_validator("AFRICASTALKING_SHORTCODE", "TEST_PHONE_NUMBER", mode="before")
    @classmethod
    def coerce_numeric_to_str(cls, v):
        """Shortcodes and phone numbers are often exported as bare integers."""
        if v is None:
            return v
        return str(v)

    @field_validator("REMINDER_SCHEDULER")
    @classmethod
    def check_scheduler(cls, v: str) -> str:
        value = v.lower()
        if value not in {"inprocess", "celery", "off"}:
            raise ValueError("REMINDER_SCHEDULER must be one of: inprocess, celery, off")
        return value

    @field_validator("CLINIC_TIMEZONE")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown CLINIC_TIMEZONE: {v}") from exc
        return v

    @model_validator(mode="after")
    def _validate_required_fields(self) -> BaseAppSettings:
        # Convert Heroku's postgres:// URL to postgresql://
        if self.DATABASE_URL and self.DATABASE_URL.startswith("postgres://"):
            self.DATABASE_URL = self.DATABASE_URL.replace("postgres://", "postgresql://", 1)

        required_in_prod = (
            "DATABASE_URL",
            "AFRICASTALKING_API_KEY",
        )
        if self.ENV.lower() == "prod":
            missing = [name for name in required_in_prod if not getattr(self, name)]
            if missing:
                raise ValueError(f"Missing required production settings: {', '.join(missing)}")
            if self.AFRICASTALKING_USERNAME == "sandbox":
                raise ValueError("AFRICASTALKING_USERNAME must not be 'sandbox' in production")
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite:///./storage/dev.db"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    DATABASE_URL: str = "sqlite:///:memory:"
    AFRICASTALKING_API_KEY: str = "test-africastalking-key"
    REMINDER_SCHEDULER: str = "off"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: str = "json"
    LOG_REDACT_PHONES: bool = True


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
