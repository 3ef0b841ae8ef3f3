"""
Celery Tasks Module.

All tasks are registered with the Celery app.

Sub-modules:
- reminder_tasks: Periodic due-reminder dispatch
"""
from __future__ import annotations

from .reminder_tasks import dispatch_due_reminders

__all__ = [
    "dispatch_due_reminders",
]
