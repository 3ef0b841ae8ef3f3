#!/usr/bin/env python3
"""List stored reminders, newest send time first.

Usage: python scripts/list_reminders.py [--pending] [--limit N]
"""

import argparse

from caresync.db.session import SessionLocal
from caresync.services.message_composer import compose_message
from caresync.services.reminder_store import ReminderStore


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--pending", action="store_true", help="only reminders not yet sent")
    parser.add_argument("--limit", type=int, default=50)
    args = parser.parse_args()

    reminders = ReminderStore(SessionLocal).list_reminders(limit=args.limit)
    if args.pending:
        reminders = [r for r in reminders if not r.sent]

    print('\n' + '=' * 80)
    print('PENDING REMINDERS' if args.pending else 'REMINDERS')
    print('=' * 80 + '\n')

    if not reminders:
        print('No reminders found in database.\n')
        return

    for i, reminder in enumerate(reminders, 1):
        print(f'{i}. [{reminder.type.value}] {reminder.name or "N/A"} <{reminder.phone}>')
        print(f'   Send at: {reminder.send_at.isoformat()}')
        print(f'   Sent: {reminder.sent_at.isoformat() if reminder.sent_at else "no"}')
        print(f'   Body: {compose_message(reminder)}')
        print(f'   ID: {reminder.id}')
        print('-' * 80)

    print(f'\nTotal: {len(reminders)}\n')


if __name__ == '__main__':
    main()
