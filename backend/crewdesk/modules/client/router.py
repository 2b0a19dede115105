# modules/client/router.py
"""
Portail client - consultation des marins visibles.

Garde client sur tout le groupe. Les pièces autorisées sont servies en
inline, sans cache ; le CV n'est jamais servi.
"""
from datetime import date
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, Response

from crewdesk.modules.client.repository import ClientCrewFilters
from crewdesk.modules.client.schemas import (
    ClientCrewOut, ClientCrewPageOut, ClientDocumentOut, ClientFiltersOut,
)
from crewdesk.modules.client.service import ClientCrewService
from crewdesk.shared.deps import ClientDep, DbDep, FileStoreDep, get_current_client

router = APIRouter(
    prefix="/client",
    tags=["Client portal"],
    dependencies=[Depends(get_current_client)],
)
service = ClientCrewService()


@router.get("/crew", response_model=ClientCrewPageOut, summary="Marins visibles")
async def list_crew(
    client: ClientDep,
    db: DbDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    rank: Optional[str] = None,
    nationality: Optional[str] = None,
    vessel_type: Optional[str] = None,
    available_by: Optional[date] = None,
    search: Optional[str] = None,
    sort_by: str = "submitted_at",
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
):
    filters = ClientCrewFilters(
        rank=rank, nationality=nationality, vessel_type=vessel_type,
        available_by=available_by, search=search,
        sort_by=sort_by, sort_order=sort_order, page=page, limit=limit,
    )
    return await service.list_crew(db, client, filters)


@router.get("/filters", response_model=ClientFiltersOut, summary="Valeurs de filtres disponibles")
async def filters(client: ClientDep, db: DbDep):
    return await service.filters(db, client)


@router.get("/crew/{crew_id}", response_model=ClientCrewOut, summary="Détail d'un marin")
async def get_crew(crew_id: int, client: ClientDep, db: DbDep):
    return await service.get_crew(db, client, crew_id)


@router.get(
    "/crew/{crew_id}/documents",
    response_model=Dict[str, ClientDocumentOut],
    summary="Pièces disponibles (sans lien de fichier)",
)
async def list_documents(crew_id: int, client: ClientDep, db: DbDep):
    return await service.list_documents(db, client, crew_id)


@router.get("/crew/{crew_id}/documents/{slot}", summary="Consulter une pièce (inline)")
async def view_document(crew_id: int, slot: str, client: ClientDep, db: DbDep, store: FileStoreDep):
    doc, content = await service.view_document(db, store, client, crew_id, slot)
    return Response(
        content=content,
        media_type=doc.content_type,
        headers={
            "Content-Disposition": f'inline; filename="{doc.original_name}"',
            "Cache-Control": "no-store",
            "X-Content-Type-Options": "nosniff",
        },
    )


@router.get("/crew/{crew_id}/cv", summary="Télécharger le CV (toujours refusé)")
async def download_cv(crew_id: int, client: ClientDep, db: DbDep):
    await service.download_cv(db, client, crew_id)
