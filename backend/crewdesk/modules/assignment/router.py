# modules/assignment/router.py
"""
    admin_router  : /admin/crew/{crew_id}/clients/{client_id}  (POST / DELETE)
    client_router : /client/crew/{crew_id}/shortlist, /client/shortlist
"""
from typing import List

from fastapi import APIRouter, Depends

from crewdesk.modules.assignment.schemas import (
    AssignmentOut, AssignedClientOut, BulkAssignIn, ShortlistOut,
)
from crewdesk.modules.assignment.service import AssignmentService
from crewdesk.modules.client.schemas import ClientCrewOut
from crewdesk.modules.crew.schemas import BulkResultOut
from crewdesk.shared.deps import AdminDep, ClientDep, DbDep, get_current_admin, get_current_client

admin_router = APIRouter(
    prefix="/admin",
    tags=["Assignments"],
    dependencies=[Depends(get_current_admin)],
)
client_router = APIRouter(
    prefix="/client",
    tags=["Client portal"],
    dependencies=[Depends(get_current_client)],
)
service = AssignmentService()


# ─────────────────────────────────────────────
# ADMIN
# ─────────────────────────────────────────────

@admin_router.post("/crew/{crew_id}/clients/{client_id}", response_model=AssignmentOut)
async def assign(crew_id: int, client_id: int, admin: AdminDep, db: DbDep):
    return await service.assign(db, admin, crew_id, client_id)


@admin_router.delete("/crew/{crew_id}/clients/{client_id}", response_model=AssignmentOut)
async def unassign(crew_id: int, client_id: int, admin: AdminDep, db: DbDep):
    return await service.unassign(db, admin, crew_id, client_id)


@admin_router.get("/crew/{crew_id}/clients", response_model=List[AssignedClientOut])
async def assigned_clients(crew_id: int, db: DbDep):
    return await service.assigned_clients(db, crew_id)


@admin_router.post("/assignments/bulk", response_model=BulkResultOut)
async def bulk_assign(payload: BulkAssignIn, admin: AdminDep, db: DbDep):
    summary = await service.bulk_assign(db, admin, payload.client_id, payload.crew_ids)
    return summary.to_dict()


# ─────────────────────────────────────────────
# CLIENT (shortlist)
# ─────────────────────────────────────────────

@client_router.get("/shortlist", response_model=List[ClientCrewOut])
async def shortlist(client: ClientDep, db: DbDep):
    return await service.shortlist(db, client)


@client_router.post("/crew/{crew_id}/shortlist", response_model=ShortlistOut)
async def shortlist_add(crew_id: int, client: ClientDep, db: DbDep):
    return await service.shortlist_add(db, client, crew_id)


@client_router.delete("/crew/{crew_id}/shortlist", response_model=ShortlistOut)
async def shortlist_remove(crew_id: int, client: ClientDep, db: DbDep):
    return await service.shortlist_remove(db, client, crew_id)
