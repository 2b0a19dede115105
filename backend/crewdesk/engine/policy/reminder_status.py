# engine/policy/reminder_status.py
"""
Cycle de vie d'un rappel admin.

    pending ──► completed   (horodatage completed_at + completed_by)
            └─► cancelled

completed et cancelled sont terminaux.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from crewdesk.shared.enums import ReminderStatus
from crewdesk.shared.errors import InvalidTransition


@dataclass(frozen=True)
class ReminderTransition:
    status: ReminderStatus
    completed_at: Optional[datetime] = None
    completed_by_id: Optional[int] = None


def complete_reminder(current, admin_id: int, now: Optional[datetime] = None) -> ReminderTransition:
    _assert_pending(current, ReminderStatus.COMPLETED)
    return ReminderTransition(
        status=ReminderStatus.COMPLETED,
        completed_at=now or datetime.now(timezone.utc),
        completed_by_id=admin_id,
    )


def cancel_reminder(current) -> ReminderTransition:
    _assert_pending(current, ReminderStatus.CANCELLED)
    return ReminderTransition(status=ReminderStatus.CANCELLED)


def is_overdue(reminder, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now(timezone.utc)
    return ReminderStatus(reminder.status) == ReminderStatus.PENDING and reminder.due_date < now


def _assert_pending(current, target: ReminderStatus) -> None:
    current = ReminderStatus(current)
    if current != ReminderStatus.PENDING:
        raise InvalidTransition(
            f"Cannot move reminder from {current.value} to {target.value}"
        )
