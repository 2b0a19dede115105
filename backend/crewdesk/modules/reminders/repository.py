# modules/reminders/repository.py
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.shared.enums import ReminderPriority, ReminderStatus
from crewdesk.shared.models import Admin, Client, Crew, Reminder


@dataclass
class ReminderFilters:
    status:    Optional[ReminderStatus] = None
    priority:  Optional[ReminderPriority] = None
    crew_id:   Optional[int] = None
    client_id: Optional[int] = None
    overdue:   bool = False


class ReminderRepository:

    async def get(self, db: AsyncSession, reminder_id: int) -> Optional[Reminder]:
        r = await db.execute(
            select(Reminder).where(Reminder.id == reminder_id)
            .execution_options(populate_existing=True)
        )
        return r.scalar_one_or_none()

    async def list_reminders(self, db: AsyncSession, filters: ReminderFilters, now: datetime) -> List[Reminder]:
        q = select(Reminder)
        if filters.status is not None:
            q = q.where(Reminder.status == filters.status)
        if filters.priority is not None:
            q = q.where(Reminder.priority == filters.priority)
        if filters.crew_id is not None:
            q = q.where(Reminder.crew_id == filters.crew_id)
        if filters.client_id is not None:
            q = q.where(Reminder.client_id == filters.client_id)
        if filters.overdue:
            q = q.where(Reminder.status == ReminderStatus.PENDING, Reminder.due_date < now)
        r = await db.execute(q.order_by(Reminder.due_date.asc(), Reminder.id.asc()))
        return list(r.scalars().all())

    async def link_exists(self, db: AsyncSession, model, link_id: int) -> bool:
        r = await db.execute(select(model.id).where(model.id == link_id))
        return r.scalar_one_or_none() is not None

    async def crew_exists(self, db: AsyncSession, crew_id: int) -> bool:
        return await self.link_exists(db, Crew, crew_id)

    async def client_exists(self, db: AsyncSession, client_id: int) -> bool:
        return await self.link_exists(db, Client, client_id)

    async def admin_exists(self, db: AsyncSession, admin_id: int) -> bool:
        return await self.link_exists(db, Admin, admin_id)

    async def create(self, db: AsyncSession, **fields) -> Reminder:
        reminder = Reminder(**fields)
        db.add(reminder)
        await db.flush()
        return reminder

    async def update_fields(self, db: AsyncSession, reminder_id: int, values: dict) -> None:
        if values:
            await db.execute(update(Reminder).where(Reminder.id == reminder_id).values(**values))

    async def set_status(
        self, db: AsyncSession, reminder_id: int, expected: ReminderStatus, values: dict,
    ) -> bool:
        """Écriture conditionnelle : ne s'applique que si le statut n'a pas bougé."""
        r = await db.execute(
            update(Reminder)
            .where(Reminder.id == reminder_id, Reminder.status == expected)
            .values(**values)
            .returning(Reminder.id)
        )
        return r.first() is not None

    async def delete(self, db: AsyncSession, reminder_id: int) -> bool:
        r = await db.execute(delete(Reminder).where(Reminder.id == reminder_id).returning(Reminder.id))
        return r.first() is not None
