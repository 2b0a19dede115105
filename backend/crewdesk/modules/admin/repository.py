# modules/admin/repository.py
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.shared.enums import CrewStatus
from crewdesk.shared.models import Client, Crew


class AdminRepository:

    # ── Clients ───────────────────────────────────────────────

    async def client_counts(self, db: AsyncSession) -> Tuple[int, int]:
        r = await db.execute(
            select(
                func.count(Client.id),
                func.count(Client.id).filter(Client.is_active.is_(True)),
            )
        )
        total, active = r.one()
        return total, active

    async def list_clients(
        self, db: AsyncSession, search: Optional[str], page: int, limit: int,
    ) -> Tuple[List[Client], int]:
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(
                Client.company_name.ilike(pattern),
                Client.email.ilike(pattern),
                Client.contact_person.ilike(pattern),
            ))

        total = (await db.execute(
            select(func.count()).select_from(Client).where(*conditions)
        )).scalar_one()
        r = await db.execute(
            select(Client).where(*conditions)
            .order_by(Client.created_at.desc(), Client.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(r.scalars().all()), total

    async def client_email_exists(self, db: AsyncSession, email: str) -> bool:
        r = await db.execute(select(Client.id).where(Client.email == email.lower()))
        return r.first() is not None

    async def create_client(self, db: AsyncSession, **fields) -> Client:
        client = Client(**fields)
        db.add(client)
        await db.flush()
        return client

    async def set_client_active(self, db: AsyncSession, client_id: int, is_active: bool) -> bool:
        r = await db.execute(
            update(Client).where(Client.id == client_id)
            .values(is_active=is_active)
            .returning(Client.id)
        )
        return r.first() is not None

    async def get_client(self, db: AsyncSession, client_id: int) -> Optional[Client]:
        r = await db.execute(
            select(Client).where(Client.id == client_id)
            .execution_options(populate_existing=True)
        )
        return r.scalar_one_or_none()

    # ── Export ────────────────────────────────────────────────

    async def crew_for_export(
        self,
        db: AsyncSession,
        status: Optional[CrewStatus] = None,
        rank: Optional[str] = None,
        nationality: Optional[str] = None,
    ) -> List[Crew]:
        q = select(Crew)
        if status is not None:
            q = q.where(Crew.status == status)
        if rank:
            q = q.where(Crew.rank == rank)
        if nationality:
            q = q.where(Crew.nationality == nationality)
        r = await db.execute(q.order_by(Crew.submitted_at.desc(), Crew.id))
        return list(r.scalars().all())
