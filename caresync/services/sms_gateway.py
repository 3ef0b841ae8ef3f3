from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

import httpx

from caresync.core.config import settings

logger = logging.getLogger(__name__)

LIVE_URL = "https://api.africastalking.com/version1/messaging"
SANDBOX_URL = "https://api.sandbox.africastalking.com/version1/messaging"
SUCCESS_STATUS = "Success"


@dataclass
class SMSResult:
    """Outcome of one gateway call. ``raw`` is the provider body when one was received."""

    status: Literal["success", "failure"]
    raw: dict[str, Any] | None = None
    error: str | None = None
    transport_error: bool = field(default=False, repr=False)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def recipient(self) -> dict[str, Any] | None:
        recipients = ((self.raw or {}).get("SMSMessageData") or {}).get("Recipients") or []
        return recipients[0] if recipients else None

    @classmethod
    def failure(cls, error: str, raw: dict[str, Any] | None = None, transport_error: bool = False) -> SMSResult:
        return cls(status="failure", raw=raw, error=error, transport_error=transport_error)


class SMSGateway(Protocol):
    async def send(self, destination: str, body: str, sender_id: str | None = None) -> SMSResult: ...


class AfricasTalkingGateway:
    """SMS delivery through the Africa's Talking messaging API.

    Never raises for delivery problems: transport errors and provider
    rejections both come back as a failed ``SMSResult``.
    """

    def __init__(
        self,
        api_key: str | None,
        username: str = "sandbox",
        timeout: float = 10.0,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.username = username
        self.timeout = timeout
        self.url = base_url or (SANDBOX_URL if username == "sandbox" else LIVE_URL)
        self._transport = transport

    async def send(self, destination: str, body: str, sender_id: str | None = None) -> SMSResult:
        if not self.api_key:
            logger.warning("SMS not configured. Set AFRICASTALKING_API_KEY")
            return SMSResult.failure("SMS gateway not configured", transport_error=True)

        form = {"username": self.username, "to": destination, "message": body}
        if sender_id:
            form["from"] = sender_id
        headers = {
            "accept": "application/json",
            "apiKey": self.api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, data=form, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Africa's Talking rejected SMS to %s: HTTP %s", destination, exc.response.status_code)
            return SMSResult.failure(f"HTTP {exc.response.status_code}: {exc.response.text[:200]}", transport_error=True)
        except httpx.HTTPError as exc:
            logger.error("Failed to reach Africa's Talking for %s: %s", destination, exc)
            return SMSResult.failure(str(exc) or exc.__class__.__name__, transport_error=True)
        except ValueError as exc:
            logger.error("Africa's Talking returned a non-JSON body for %s: %s", destination, exc)
            return SMSResult.failure("Invalid provider response", transport_error=True)

        result = SMSResult(status="success", raw=data)
        recipient = result.recipient
        if recipient and recipient.get("status") == SUCCESS_STATUS:
            logger.info("SMS accepted for %s (messageId: %s)", destination, recipient.get("messageId"))
            return result
        reason = (recipient or {}).get("status") or (data.get("SMSMessageData") or {}).get("Message") or "unknown"
        logger.warning("SMS to %s not accepted: %s", destination, reason)
        return SMSResult.failure(reason, raw=data)


def build_gateway() -> AfricasTalkingGateway:
    return AfricasTalkingGateway(
        api_key=settings.AFRICASTALKING_API_KEY,
        username=settings.AFRICASTALKING_USERNAME,
        timeout=settings.SMS_TIMEOUT_SECONDS,
    )
