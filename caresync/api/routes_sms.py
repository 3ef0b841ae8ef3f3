"""Ad hoc SMS endpoints. These bypass the reminder store entirely."""
from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from caresync import metrics
from caresync.api.dependencies import GatewayDep
from caresync.core.config import settings
from caresync.models import schemas
from caresync.services.message_composer import compose_direct_message
from caresync.utils.phone import normalize_phone

logger = logging.getLogger(__name__)
router = APIRouter(tags=["sms"])

TEST_MESSAGE = "Hello from CareSync! This is a test message."


@router.post("/send-sms", response_model=schemas.SendSMSResponse)
async def send_sms(payload: schemas.SendSMSRequest, gateway: GatewayDep):
    destination = normalize_phone(payload.to)
    body = compose_direct_message(payload.message, payload.name)

    result = await gateway.send(destination, body, settings.AFRICASTALKING_SHORTCODE)
    if result.ok:
        metrics.sms_direct_send("sent")
        return schemas.SendSMSResponse(success=True, message="SMS sent", data=result.recipient)

    if result.transport_error:
        metrics.sms_direct_send("error")
        logger.error("SMS to %s failed: %s", destination, result.error)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "SMS sending failed", "details": result.error},
        )

    metrics.sms_direct_send("rejected")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Failed to send SMS", "result": result.raw},
    )


@router.post("/test-sms", response_model=schemas.CannedSMSResponse)
async def test_sms(gateway: GatewayDep):
    destination = settings.TEST_PHONE_NUMBER
    result = await gateway.send(destination, TEST_MESSAGE)
    if not result.ok:
        metrics.sms_direct_send("error")
        logger.error("Test SMS to %s failed: %s", destination, result.error)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Test SMS failed", "details": result.error},
        )
    metrics.sms_direct_send("sent")
    return schemas.CannedSMSResponse(success=True, message="Test SMS sent", to=destination, result=result.raw)
