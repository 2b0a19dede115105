# modules/reminders/service.py
"""
Rappels internes des admins.

Les liens crew_id / client_id / assigned_to_id sont vérifiés à la création
et à la mise à jour (NotFound si absents). Le statut ne change que via
complete() / cancel(), jamais via update().
"""
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.engine.access.principal import AdminPrincipal
from crewdesk.engine.policy.reminder_status import (
    ReminderTransition, cancel_reminder, complete_reminder, is_overdue,
)
from crewdesk.modules.reminders.repository import ReminderFilters, ReminderRepository
from crewdesk.modules.reminders.schemas import ReminderCreateIn, ReminderOut, ReminderUpdateIn
from crewdesk.shared.enums import ReminderStatus
from crewdesk.shared.errors import InvalidTransition, NotFound
from crewdesk.shared.models import Reminder

logger = logging.getLogger(__name__)

repo = ReminderRepository()


class ReminderService:

    async def create(self, db: AsyncSession, admin: AdminPrincipal, payload: ReminderCreateIn) -> ReminderOut:
        fields = payload.model_dump()
        await self._assert_links(db, fields)
        reminder = await repo.create(
            db, **fields, status=ReminderStatus.PENDING, created_by_id=admin.id,
        )
        await db.commit()
        logger.info("Admin %s created reminder %s", admin.id, reminder.id)
        return to_out(await repo.get(db, reminder.id))

    async def list_reminders(self, db: AsyncSession, filters: ReminderFilters) -> List[ReminderOut]:
        now = datetime.now(timezone.utc)
        return [to_out(r, now) for r in await repo.list_reminders(db, filters, now)]

    async def get(self, db: AsyncSession, reminder_id: int) -> ReminderOut:
        return to_out(await self._get_or_404(db, reminder_id))

    async def update(self, db: AsyncSession, reminder_id: int, payload: ReminderUpdateIn) -> ReminderOut:
        await self._get_or_404(db, reminder_id)
        values = payload.model_dump(exclude_unset=True)
        await self._assert_links(db, values)
        await repo.update_fields(db, reminder_id, values)
        await db.commit()
        return to_out(await repo.get(db, reminder_id))

    async def complete(self, db: AsyncSession, admin: AdminPrincipal, reminder_id: int) -> ReminderOut:
        reminder = await self._get_or_404(db, reminder_id)
        transition = complete_reminder(reminder.status, admin.id)
        return await self._apply(db, reminder_id, ReminderStatus(reminder.status), transition)

    async def cancel(self, db: AsyncSession, admin: AdminPrincipal, reminder_id: int) -> ReminderOut:
        reminder = await self._get_or_404(db, reminder_id)
        transition = cancel_reminder(reminder.status)
        return await self._apply(db, reminder_id, ReminderStatus(reminder.status), transition)

    async def delete(self, db: AsyncSession, reminder_id: int) -> None:
        if not await repo.delete(db, reminder_id):
            raise NotFound("Reminder not found")
        await db.commit()

    # ── Privé ─────────────────────────────────────────────────

    async def _get_or_404(self, db: AsyncSession, reminder_id: int) -> Reminder:
        reminder = await repo.get(db, reminder_id)
        if reminder is None:
            raise NotFound("Reminder not found")
        return reminder

    async def _apply(
        self, db: AsyncSession, reminder_id: int, expected: ReminderStatus, transition: ReminderTransition,
    ) -> ReminderOut:
        """`reminder_id` et `expected` sont lus avant l'écriture : le rollback expire l'instance."""
        values = {"status": transition.status}
        if transition.completed_at is not None:
            values["completed_at"] = transition.completed_at
            values["completed_by_id"] = transition.completed_by_id

        applied = await repo.set_status(db, reminder_id, expected, values)
        if not applied:
            await db.rollback()
            raise InvalidTransition(f"Reminder {reminder_id} is no longer pending")
        await db.commit()
        logger.info("Reminder %s -> %s", reminder_id, transition.status.value)
        return to_out(await repo.get(db, reminder_id))

    async def _assert_links(self, db: AsyncSession, fields: dict) -> None:
        if fields.get("crew_id") is not None and not await repo.crew_exists(db, fields["crew_id"]):
            raise NotFound("Crew not found")
        if fields.get("client_id") is not None and not await repo.client_exists(db, fields["client_id"]):
            raise NotFound("Client not found")
        if fields.get("assigned_to_id") is not None and not await repo.admin_exists(db, fields["assigned_to_id"]):
            raise NotFound("Admin not found")


def to_out(reminder: Reminder, now: datetime = None) -> ReminderOut:
    out = ReminderOut.model_validate(reminder)
    return out.model_copy(update={"is_overdue": is_overdue(reminder, now)})
