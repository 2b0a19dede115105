# modules/client/service.py
"""
Consultation des dossiers marins par un client.

Chaque opération reçoit explicitement le ClientPrincipal appelant.
Un dossier non visible pour ce client est traité comme inexistant (404).

Pièces - ordre des contrôles :
    1. emplacement hors liste blanche (CV compris)  → 403, avant toute lecture
    2. dossier non visible                          → 404
    3. pièce absente                                → 404
    4. lecture du stockage                          → 404 / 503
"""
import math
from typing import Dict, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.core.config import settings
from crewdesk.engine.access.principal import ClientPrincipal
from crewdesk.engine.policy.documents import (
    client_document_summary, deny_cv_download, find_document, parse_client_slot,
)
from crewdesk.engine.policy.visibility import VisibilityVariant, is_visible_to_client, redact_for_client
from crewdesk.infra.storage import FileStore
from crewdesk.modules.client.repository import ClientCrewFilters, ClientCrewRepository
from crewdesk.shared.errors import NotFound
from crewdesk.shared.models import Crew, CrewDocument

repo = ClientCrewRepository()

NOT_VISIBLE = "Crew member not found or not approved"


def current_variant() -> VisibilityVariant:
    return VisibilityVariant(settings.CLIENT_VISIBILITY)


class ClientCrewService:

    async def get_visible_crew(self, db: AsyncSession, client: ClientPrincipal, crew_id: int) -> Crew:
        crew = await repo.get_crew(db, crew_id)
        if not is_visible_to_client(crew, client.id, current_variant()):
            raise NotFound(NOT_VISIBLE)
        return crew

    # ── Listes ────────────────────────────────────────────────

    async def list_crew(self, db: AsyncSession, client: ClientPrincipal, filters: ClientCrewFilters) -> dict:
        items, total = await repo.list_visible(db, client.id, current_variant(), filters)
        return {
            "items": [redact_for_client(c) for c in items],
            "total": total,
            "page": filters.page,
            "total_pages": math.ceil(total / filters.limit) if total else 0,
        }

    async def get_crew(self, db: AsyncSession, client: ClientPrincipal, crew_id: int) -> dict:
        return redact_for_client(await self.get_visible_crew(db, client, crew_id))

    async def filters(self, db: AsyncSession, client: ClientPrincipal) -> dict:
        variant = current_variant()
        return {
            "ranks": await repo.distinct_values(db, Crew.rank, client.id, variant),
            "nationalities": await repo.distinct_values(db, Crew.nationality, client.id, variant),
            "vessel_types": await repo.distinct_values(db, Crew.preferred_vessel_type, client.id, variant),
        }

    # ── Pièces ────────────────────────────────────────────────

    async def list_documents(self, db: AsyncSession, client: ClientPrincipal, crew_id: int) -> Dict[str, dict]:
        crew = await self.get_visible_crew(db, client, crew_id)
        return client_document_summary(crew.documents)

    async def view_document(
        self, db: AsyncSession, store: FileStore, client: ClientPrincipal, crew_id: int, slot: str,
    ) -> Tuple[CrewDocument, bytes]:
        parsed = parse_client_slot(slot)
        crew = await self.get_visible_crew(db, client, crew_id)
        doc = find_document(crew.documents, parsed)
        if doc is None:
            raise NotFound("Document not found")
        return doc, store.retrieve(doc.storage_ref)

    async def download_cv(self, db: AsyncSession, client: ClientPrincipal, crew_id: int) -> None:
        """Toujours refusé, quel que soit l'état du dossier."""
        deny_cv_download()
