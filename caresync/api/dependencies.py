"""Request-scoped access to the process-wide store and gateway.

Both are constructed once in ``create_app`` and kept on ``app.state``; tests
swap them by assigning new objects there.
"""
from typing import Annotated, TypeAlias

from fastapi import Depends, Request

from caresync.services.reminder_store import ReminderStore
from caresync.services.sms_gateway import SMSGateway


def get_reminder_store(request: Request) -> ReminderStore:
    return request.app.state.reminder_store


def get_sms_gateway(request: Request) -> SMSGateway:
    return request.app.state.sms_gateway


StoreDep: TypeAlias = Annotated[ReminderStore, Depends(get_reminder_store)]
GatewayDep: TypeAlias = Annotated[SMSGateway, Depends(get_sms_gateway)]
