# modules/crew/router.py
"""
Endpoints des dossiers marins.

    router       : candidature publique (multipart, sans authentification)
    admin_router : back-office - la garde admin s'applique à tout le groupe

Règle : zéro requête DB ici. Tout passe par CrewService.
Les routes à segment fixe (/stats, /bulk) sont déclarées avant /{crew_id}.
"""
from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, Response, UploadFile, status
from pydantic import ValidationError

from crewdesk.engine.policy.bulk import BulkSummary
from crewdesk.modules.crew.repository import CrewFilters
from crewdesk.modules.crew.schemas import (
    CrewApplicationIn, CrewRegisteredOut, CrewPageOut, CrewDetailOut,
    CrewStatusUpdateIn, TagsIn, BulkStatusIn, BulkTagsIn, BulkIdsIn,
    BulkResultOut, BulkExportOut, CrewStatsOut,
)
from crewdesk.modules.crew.service import CrewService, export_filename
from crewdesk.shared.deps import DbDep, FileStoreDep, NotifierDep, get_current_admin
from crewdesk.shared.enums import CrewRank, CrewStatus, DocumentSlot
from crewdesk.shared.errors import ValidationFailed

router = APIRouter(prefix="/crew", tags=["Crew"])
admin_router = APIRouter(
    prefix="/crew",
    tags=["Crew (admin)"],
    dependencies=[Depends(get_current_admin)],
)
service = CrewService()

UploadSlot = Annotated[Optional[UploadFile], File()]


def application_form(
    full_name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(...),
    rank: CrewRank = Form(...),
    nationality: str = Form(...),
    current_location: str = Form(...),
    date_of_birth: date = Form(...),
    availability_date: date = Form(...),
    sea_time_summary: Optional[str] = Form(None),
    preferred_vessel_type: Optional[str] = Form(None),
    additional_notes: Optional[str] = Form(None),
) -> CrewApplicationIn:
    try:
        return CrewApplicationIn(
            full_name=full_name, email=email, phone=phone, rank=rank,
            nationality=nationality, current_location=current_location,
            date_of_birth=date_of_birth, availability_date=availability_date,
            sea_time_summary=sea_time_summary,
            preferred_vessel_type=preferred_vessel_type,
            additional_notes=additional_notes,
        )
    except ValidationError as e:
        raise ValidationFailed(
            "Invalid application form",
            errors=[
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ],
        )


# ─────────────────────────────────────────────
# CANDIDATURE (public)
# ─────────────────────────────────────────────

@router.post(
    "/register",
    response_model=CrewRegisteredOut,
    status_code=status.HTTP_201_CREATED,
    summary="Déposer une candidature marin",
)
async def register_crew(
    payload: Annotated[CrewApplicationIn, Depends(application_form)],
    db: DbDep,
    store: FileStoreDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
    cv: UploadSlot = None,
    passport: UploadSlot = None,
    cdc: UploadSlot = None,
    stcw: UploadSlot = None,
    coc: UploadSlot = None,
    seaman_book: Annotated[Optional[UploadFile], File(alias="seamanBook")] = None,
    visa: UploadSlot = None,
    photo: UploadSlot = None,
):
    """
    Formulaire + pièces. Obligatoires : cv, passport, cdc, stcw, coc,
    seamanBook, visa. Facultative : photo. PDF/JPEG/PNG, 10 Mo max.
    """
    uploads = {
        DocumentSlot.CV: cv,
        DocumentSlot.PASSPORT: passport,
        DocumentSlot.CDC: cdc,
        DocumentSlot.STCW: stcw,
        DocumentSlot.COC: coc,
        DocumentSlot.SEAMAN_BOOK: seaman_book,
        DocumentSlot.VISA: visa,
        DocumentSlot.PHOTO: photo,
    }
    files = {slot: f for slot, f in uploads.items() if f is not None and f.filename}
    crew = await service.register(db, store, payload, files, background_tasks, notifier)
    return CrewRegisteredOut(crew_id=crew.id)


# ─────────────────────────────────────────────
# STATISTIQUES & OPÉRATIONS GROUPÉES (admin)
# ─────────────────────────────────────────────

@admin_router.get("/stats/overview", response_model=CrewStatsOut, summary="Statistiques des dossiers")
async def crew_stats(db: DbDep):
    return await service.stats(db)


def _bulk_out(summary: BulkSummary) -> dict:
    return summary.to_dict()


@admin_router.post("/bulk/status", response_model=BulkResultOut, summary="Statut groupé")
async def bulk_status(
    payload: BulkStatusIn, db: DbDep, notifier: NotifierDep, background_tasks: BackgroundTasks,
):
    summary = await service.bulk_update_status(
        db, payload.crew_ids, payload.status, background_tasks, notifier,
    )
    return _bulk_out(summary)


@admin_router.post("/bulk/tags", response_model=BulkResultOut, summary="Ajout groupé de tags (fusion)")
async def bulk_tags(payload: BulkTagsIn, db: DbDep):
    return _bulk_out(await service.bulk_add_tags(db, payload.crew_ids, payload.tags))


@admin_router.post("/bulk/export", response_model=BulkExportOut, summary="Export client des dossiers choisis")
async def bulk_export(payload: BulkIdsIn, db: DbDep):
    summary, content = await service.bulk_export(db, payload.crew_ids)
    return {
        **summary.to_dict(),
        "filename": export_filename("crew-client-export"),
        "csv": content.decode("utf-8"),
    }


# ─────────────────────────────────────────────
# DOSSIERS (admin)
# ─────────────────────────────────────────────

@admin_router.get("", response_model=CrewPageOut, summary="Liste filtrée des dossiers")
async def list_crew(
    db: DbDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[CrewStatus] = Query(None, alias="status"),
    rank: Optional[str] = None,
    nationality: Optional[str] = None,
    priority: Optional[bool] = None,
    search: Optional[str] = None,
    sort_by: str = "submitted_at",
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
):
    filters = CrewFilters(
        status=status_filter, rank=rank, nationality=nationality, priority=priority,
        search=search, sort_by=sort_by, sort_order=sort_order, page=page, limit=limit,
    )
    return await service.list_crew(db, filters)


@admin_router.get("/{crew_id}", response_model=CrewDetailOut, summary="Dossier complet")
async def get_crew(crew_id: int, db: DbDep):
    return await service.get_crew(db, crew_id)


@admin_router.patch("/{crew_id}/status", response_model=CrewDetailOut, summary="Statut et drapeaux")
async def update_status(
    crew_id: int,
    payload: CrewStatusUpdateIn,
    db: DbDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
):
    """`tags` fourni ici remplace l'ensemble ; utiliser /tags pour ajouter."""
    return await service.update_status(db, crew_id, payload, background_tasks, notifier)


@admin_router.post("/{crew_id}/tags", response_model=CrewDetailOut, summary="Ajouter des tags (fusion)")
async def add_tags(crew_id: int, payload: TagsIn, db: DbDep):
    return await service.add_tags(db, crew_id, payload.tags)


@admin_router.get("/{crew_id}/documents/{slot}", summary="Télécharger une pièce")
async def download_document(crew_id: int, slot: DocumentSlot, db: DbDep, store: FileStoreDep):
    doc, content = await service.get_document(db, store, crew_id, slot)
    return Response(
        content=content,
        media_type=doc.content_type,
        headers={"Content-Disposition": f'attachment; filename="{doc.original_name}"'},
    )
