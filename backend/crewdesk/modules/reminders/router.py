# modules/reminders/router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from crewdesk.modules.reminders.repository import ReminderFilters
from crewdesk.modules.reminders.schemas import ReminderCreateIn, ReminderOut, ReminderUpdateIn
from crewdesk.modules.reminders.service import ReminderService
from crewdesk.shared.deps import AdminDep, DbDep, get_current_admin
from crewdesk.shared.enums import ReminderPriority, ReminderStatus

router = APIRouter(
    prefix="/admin/reminders",
    tags=["Reminders"],
    dependencies=[Depends(get_current_admin)],
)
service = ReminderService()


@router.post("", response_model=ReminderOut, status_code=status.HTTP_201_CREATED)
async def create_reminder(payload: ReminderCreateIn, admin: AdminDep, db: DbDep):
    return await service.create(db, admin, payload)


@router.get("", response_model=List[ReminderOut])
async def list_reminders(
    db: DbDep,
    status_filter: Optional[ReminderStatus] = Query(None, alias="status"),
    priority: Optional[ReminderPriority] = None,
    crew_id: Optional[int] = None,
    client_id: Optional[int] = None,
    overdue: bool = False,
):
    filters = ReminderFilters(
        status=status_filter, priority=priority,
        crew_id=crew_id, client_id=client_id, overdue=overdue,
    )
    return await service.list_reminders(db, filters)


@router.get("/{reminder_id}", response_model=ReminderOut)
async def get_reminder(reminder_id: int, db: DbDep):
    return await service.get(db, reminder_id)


@router.patch("/{reminder_id}", response_model=ReminderOut)
async def update_reminder(reminder_id: int, payload: ReminderUpdateIn, db: DbDep):
    return await service.update(db, reminder_id, payload)


@router.post("/{reminder_id}/complete", response_model=ReminderOut)
async def complete_reminder(reminder_id: int, admin: AdminDep, db: DbDep):
    return await service.complete(db, admin, reminder_id)


@router.post("/{reminder_id}/cancel", response_model=ReminderOut)
async def cancel_reminder(reminder_id: int, admin: AdminDep, db: DbDep):
    return await service.cancel(db, admin, reminder_id)


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reminder(reminder_id: int, db: DbDep):
    await service.delete(db, reminder_id)
