# modules/assignment/service.py
"""
Affectation d'un marin à un client (admin) et shortlist (client).

Admin :
    assign(crew, client)   → les deux doivent exister ; NotFound nomme le côté absent
    unassign(crew, client) → supprime si présent ; absent = succès

Client (sur son propre id uniquement) :
    shortlist_add    → le dossier doit lui être visible (sinon 404) ;
                       ajout idempotent, no-op si déjà affecté
    shortlist_remove → retire son id ; dossier inexistant → 404
"""
import logging
from typing import List, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.engine.access.principal import AdminPrincipal, ClientPrincipal
from crewdesk.engine.policy.bulk import BulkSummary, unique_ids
from crewdesk.engine.policy.visibility import redact_for_client
from crewdesk.modules.assignment.repository import AssignmentRepository
from crewdesk.modules.client.repository import ClientCrewRepository
from crewdesk.modules.client.service import ClientCrewService, current_variant
from crewdesk.shared.errors import NotFound
from crewdesk.shared.models import Client

logger = logging.getLogger(__name__)

repo = AssignmentRepository()
client_crew_repo = ClientCrewRepository()
client_crew_service = ClientCrewService()


class AssignmentService:

    # ── Admin ─────────────────────────────────────────────────

    async def assign(self, db: AsyncSession, admin: AdminPrincipal, crew_id: int, client_id: int) -> dict:
        await self._assert_both_exist(db, crew_id, client_id)
        created = await repo.assign(db, [crew_id], client_id)
        await db.commit()
        if created:
            logger.info("Admin %s assigned crew %s to client %s", admin.id, crew_id, client_id)
        return {"crew_id": crew_id, "client_id": client_id, "assigned": True, "changed": bool(created)}

    async def unassign(self, db: AsyncSession, admin: AdminPrincipal, crew_id: int, client_id: int) -> dict:
        removed = await repo.unassign(db, crew_id, client_id)
        await db.commit()
        if removed:
            logger.info("Admin %s unassigned crew %s from client %s", admin.id, crew_id, client_id)
        return {"crew_id": crew_id, "client_id": client_id, "assigned": False, "changed": removed}

    async def bulk_assign(
        self, db: AsyncSession, admin: AdminPrincipal, client_id: int, crew_ids: Sequence[int],
    ) -> BulkSummary:
        if not await repo.client_exists(db, client_id):
            raise NotFound("Client not found")

        ids = unique_ids(list(crew_ids))
        existing = await repo.existing_crew_ids(db, ids)
        await repo.assign(db, [i for i in ids if i in existing], client_id)
        await db.commit()

        summary = BulkSummary()
        for crew_id in ids:
            if crew_id in existing:
                summary.ok(crew_id)
            else:
                summary.fail(crew_id, "Crew not found")
        logger.info(
            "Admin %s bulk-assigned %s/%s crew to client %s",
            admin.id, summary.successful, summary.total, client_id,
        )
        return summary

    async def assigned_clients(self, db: AsyncSession, crew_id: int) -> List[Client]:
        if not await repo.crew_exists(db, crew_id):
            raise NotFound("Crew not found")
        return await repo.clients_for_crew(db, crew_id)

    # ── Client ────────────────────────────────────────────────

    async def shortlist_add(self, db: AsyncSession, client: ClientPrincipal, crew_id: int) -> dict:
        await client_crew_service.get_visible_crew(db, client, crew_id)
        await repo.assign(db, [crew_id], client.id)
        await db.commit()
        return {"crew_id": crew_id, "shortlisted": True, "message": "Crew member added to shortlist"}

    async def shortlist_remove(self, db: AsyncSession, client: ClientPrincipal, crew_id: int) -> dict:
        if not await repo.crew_exists(db, crew_id):
            raise NotFound("Crew member not found")
        await repo.unassign(db, crew_id, client.id)
        await db.commit()
        return {"crew_id": crew_id, "shortlisted": False, "message": "Crew member removed from shortlist"}

    async def shortlist(self, db: AsyncSession, client: ClientPrincipal) -> List[dict]:
        crews = await client_crew_repo.shortlisted(db, client.id, current_variant())
        return [redact_for_client(c) for c in crews]

    # ── Privé ─────────────────────────────────────────────────

    async def _assert_both_exist(self, db: AsyncSession, crew_id: int, client_id: int) -> None:
        if not await repo.crew_exists(db, crew_id):
            raise NotFound("Crew not found")
        if not await repo.client_exists(db, client_id):
            raise NotFound("Client not found")
