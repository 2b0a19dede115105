# modules/admin/service.py
"""
Back-office : tableau de bord, comptes client, export CSV admin.

L'export admin garde les coordonnées (email, téléphone) mais jamais les
notes internes ni les pièces : seules les colonnes ADMIN_CREW_COLUMNS sortent.
"""
import logging
import math
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.core.security import hash_password
from crewdesk.engine.access.principal import AdminPrincipal
from crewdesk.infra.export import ADMIN_CREW_COLUMNS, crew_rows_to_csv
from crewdesk.modules.admin.repository import AdminRepository
from crewdesk.modules.admin.schemas import ClientCreateIn
from crewdesk.modules.crew.repository import CrewRepository
from crewdesk.modules.crew.service import CrewService
from crewdesk.modules.requests.repository import RequestRepository
from crewdesk.shared.enums import CrewStatus
from crewdesk.shared.errors import DuplicateConflict, NotFound
from crewdesk.shared.models import Client

logger = logging.getLogger(__name__)

repo = AdminRepository()
crew_repo = CrewRepository()
request_repo = RequestRepository()
crew_service = CrewService()

DUPLICATE_CLIENT = "Client already exists with this email"


class AdminService:

    async def dashboard(self, db: AsyncSession) -> dict:
        total, active = await repo.client_counts(db)
        return {
            "crew_stats": await crew_service.stats(db),
            "client_stats": {"total": total, "active": active},
            "recent_crew": await crew_repo.recent(db, limit=5),
            "pending_requests": await request_repo.recent_pending(db, limit=10),
        }

    # ── Comptes client ────────────────────────────────────────

    async def list_clients(self, db: AsyncSession, search: Optional[str], page: int, limit: int) -> dict:
        items, total = await repo.list_clients(db, search, page, limit)
        return {
            "items": items,
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / limit) if total else 0,
        }

    async def create_client(self, db: AsyncSession, admin: AdminPrincipal, payload: ClientCreateIn) -> Client:
        if await repo.client_email_exists(db, payload.email):
            raise DuplicateConflict(DUPLICATE_CLIENT)

        fields = payload.model_dump(exclude={"password"})
        try:
            client = await repo.create_client(db, **fields, hashed_password=hash_password(payload.password))
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise DuplicateConflict(DUPLICATE_CLIENT)

        logger.info("Admin %s created client account %s", admin.id, client.id)
        return await repo.get_client(db, client.id)

    async def set_client_status(
        self, db: AsyncSession, admin: AdminPrincipal, client_id: int, is_active: bool,
    ) -> Client:
        if not await repo.set_client_active(db, client_id, is_active):
            raise NotFound("Client not found")
        await db.commit()
        logger.info(
            "Admin %s %s client %s", admin.id, "activated" if is_active else "deactivated", client_id,
        )
        return await repo.get_client(db, client_id)

    # ── Export ────────────────────────────────────────────────

    async def export_crew(
        self,
        db: AsyncSession,
        status: Optional[CrewStatus] = None,
        rank: Optional[str] = None,
        nationality: Optional[str] = None,
    ) -> bytes:
        crews = await repo.crew_for_export(db, status, rank, nationality)
        rows = [{key: getattr(c, key, None) for key, _ in ADMIN_CREW_COLUMNS} for c in crews]
        return crew_rows_to_csv(rows, ADMIN_CREW_COLUMNS)
