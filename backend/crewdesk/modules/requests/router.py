# modules/requests/router.py
"""
    client_router : /client/requests            (soumission, suivi, follow-up)
    admin_router  : /admin/requests             (liste, réponse, follow-up, suppression)
"""
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from crewdesk.modules.requests.schemas import (
    AdminRequestOut, AdminRequestPageOut, ClientRequestOut, ClientRequestPageOut,
    FollowUpIn, RequestCreatedOut, RequestCreateIn, RespondIn,
)
from crewdesk.modules.requests.service import RequestService
from crewdesk.shared.deps import (
    AdminDep, ClientDep, DbDep, NotifierDep, SuperAdminDep,
    get_current_admin, get_current_client,
)
from crewdesk.shared.enums import RequestStatus

client_router = APIRouter(
    prefix="/client/requests",
    tags=["Client requests"],
    dependencies=[Depends(get_current_client)],
)
admin_router = APIRouter(
    prefix="/admin/requests",
    tags=["Client requests (admin)"],
    dependencies=[Depends(get_current_admin)],
)
service = RequestService()


# ─────────────────────────────────────────────
# CLIENT
# ─────────────────────────────────────────────

@client_router.post("", response_model=RequestCreatedOut, status_code=status.HTTP_201_CREATED)
async def submit_request(
    payload: RequestCreateIn,
    client: ClientDep,
    db: DbDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
):
    request = await service.submit(db, client, payload, background_tasks, notifier)
    return {"request_id": request.id}


@client_router.get("", response_model=ClientRequestPageOut)
async def list_my_requests(
    client: ClientDep,
    db: DbDep,
    status_filter: Optional[RequestStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    return await service.list_own(db, client, status_filter, page, limit)


@client_router.get("/{request_id}", response_model=ClientRequestOut)
async def get_my_request(request_id: int, client: ClientDep, db: DbDep):
    return await service.get_own(db, client, request_id)


@client_router.post("/{request_id}/follow-ups", response_model=ClientRequestOut)
async def client_follow_up(request_id: int, payload: FollowUpIn, client: ClientDep, db: DbDep):
    return await service.client_follow_up(db, client, request_id, payload)


# ─────────────────────────────────────────────
# ADMIN
# ─────────────────────────────────────────────

@admin_router.get("", response_model=AdminRequestPageOut)
async def list_requests(
    db: DbDep,
    status_filter: Optional[RequestStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    return await service.list_all(db, status_filter, page, limit)


@admin_router.get("/{request_id}", response_model=AdminRequestOut)
async def get_request(request_id: int, db: DbDep):
    return await service.get(db, request_id)


@admin_router.patch("/{request_id}/respond", response_model=AdminRequestOut)
async def respond(
    request_id: int,
    payload: RespondIn,
    admin: AdminDep,
    db: DbDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
):
    return await service.respond(db, admin, request_id, payload, background_tasks, notifier)


@admin_router.post("/{request_id}/follow-ups", response_model=AdminRequestOut)
async def admin_follow_up(request_id: int, payload: FollowUpIn, admin: AdminDep, db: DbDep):
    return await service.admin_follow_up(db, admin, request_id, payload)


@admin_router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(request_id: int, admin: SuperAdminDep, db: DbDep):
    await service.delete(db, admin, request_id)
