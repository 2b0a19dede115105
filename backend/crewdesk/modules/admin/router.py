# modules/admin/router.py
"""
Back-office admin - garde admin sur tout le groupe.

    GET   /admin/dashboard
    GET   /admin/clients              POST /admin/clients
    PATCH /admin/clients/{id}/status
    GET   /admin/export/crew          (CSV en pièce jointe)
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from crewdesk.modules.admin.schemas import (
    ClientAccountOut, ClientCreateIn, ClientPageOut, ClientStatusIn, DashboardOut,
)
from crewdesk.modules.admin.service import AdminService
from crewdesk.modules.crew.service import export_filename
from crewdesk.shared.deps import AdminDep, DbDep, get_current_admin
from crewdesk.shared.enums import CrewStatus

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(get_current_admin)],
)
service = AdminService()


@router.get("/dashboard", response_model=DashboardOut)
async def dashboard(db: DbDep):
    return await service.dashboard(db)


# ─────────────────────────────────────────────
# COMPTES CLIENT
# ─────────────────────────────────────────────

@router.get("/clients", response_model=ClientPageOut)
async def list_clients(
    db: DbDep,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    return await service.list_clients(db, search, page, limit)


@router.post("/clients", response_model=ClientAccountOut, status_code=status.HTTP_201_CREATED)
async def create_client(payload: ClientCreateIn, admin: AdminDep, db: DbDep):
    return await service.create_client(db, admin, payload)


@router.patch("/clients/{client_id}/status", response_model=ClientAccountOut)
async def set_client_status(client_id: int, payload: ClientStatusIn, admin: AdminDep, db: DbDep):
    return await service.set_client_status(db, admin, client_id, payload.is_active)


# ─────────────────────────────────────────────
# EXPORT
# ─────────────────────────────────────────────

@router.get("/export/crew")
async def export_crew(
    db: DbDep,
    status_filter: Optional[CrewStatus] = Query(None, alias="status"),
    rank: Optional[str] = None,
    nationality: Optional[str] = None,
):
    content = await service.export_crew(db, status_filter, rank, nationality)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename("crew-export")}"'},
    )
