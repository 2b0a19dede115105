# modules/crew/repository.py
"""
Accès DB pour les dossiers marins, leurs pièces et leurs tags.

Aucun commit ici : le service décide de la frontière de transaction.
Les tags s'ajoutent en INSERT … ON CONFLICT DO NOTHING (pas de
lecture-modification-écriture de la liste).
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.shared.enums import CrewStatus
from crewdesk.shared.models import Crew, CrewDocument, CrewTag

SORTABLE_FIELDS = {
    "submitted_at":      Crew.submitted_at,
    "full_name":         Crew.full_name,
    "rank":              Crew.rank,
    "nationality":       Crew.nationality,
    "availability_date": Crew.availability_date,
    "status":            Crew.status,
    "last_updated":      Crew.last_updated,
}


@dataclass
class CrewFilters:
    status: Optional[CrewStatus] = None
    rank: Optional[str] = None
    nationality: Optional[str] = None
    search: Optional[str] = None
    priority: Optional[bool] = None
    sort_by: str = "submitted_at"
    sort_order: str = "desc"
    page: int = 1
    limit: int = 10


class CrewRepository:

    # ── Lecture ───────────────────────────────────────────────

    async def get(self, db: AsyncSession, crew_id: int) -> Optional[Crew]:
        r = await db.execute(
            select(Crew).where(Crew.id == crew_id)
            .execution_options(populate_existing=True)
        )
        return r.scalar_one_or_none()

    async def get_many(self, db: AsyncSession, crew_ids: Sequence[int]) -> List[Crew]:
        if not crew_ids:
            return []
        r = await db.execute(select(Crew).where(Crew.id.in_(crew_ids)))
        return list(r.scalars().all())

    async def email_exists(self, db: AsyncSession, email: str) -> bool:
        r = await db.execute(select(Crew.id).where(Crew.email == email.lower()))
        return r.first() is not None

    async def list_crew(self, db: AsyncSession, f: CrewFilters) -> Tuple[List[Crew], int]:
        conditions = []
        if f.status:
            conditions.append(Crew.status == f.status)
        if f.rank:
            conditions.append(Crew.rank == f.rank)
        if f.nationality:
            conditions.append(Crew.nationality == f.nationality)
        if f.priority is not None:
            conditions.append(Crew.priority == f.priority)
        if f.search:
            pattern = f"%{f.search}%"
            conditions.append(or_(
                Crew.full_name.ilike(pattern),
                Crew.email.ilike(pattern),
                Crew.phone.ilike(pattern),
            ))

        column = SORTABLE_FIELDS.get(f.sort_by, Crew.submitted_at)
        order = column.asc() if f.sort_order == "asc" else column.desc()

        total = (await db.execute(
            select(func.count()).select_from(Crew).where(*conditions)
        )).scalar_one()
        r = await db.execute(
            select(Crew).where(*conditions)
            .order_by(order, Crew.id)
            .offset((f.page - 1) * f.limit)
            .limit(f.limit)
        )
        return list(r.scalars().all()), total

    async def recent(self, db: AsyncSession, limit: int = 5) -> List[Crew]:
        r = await db.execute(select(Crew).order_by(Crew.submitted_at.desc()).limit(limit))
        return list(r.scalars().all())

    # ── Écriture ──────────────────────────────────────────────

    async def create(self, db: AsyncSession, fields: dict, documents: Iterable[dict]) -> Crew:
        crew = Crew(**fields)
        db.add(crew)
        await db.flush()
        for doc in documents:
            db.add(CrewDocument(crew_id=crew.id, **doc))
        await db.flush()
        return crew

    async def update_fields(self, db: AsyncSession, crew_id: int, values: dict) -> bool:
        r = await db.execute(
            update(Crew).where(Crew.id == crew_id).values(**values).returning(Crew.id)
        )
        return r.scalar_one_or_none() is not None

    async def set_status_many(
        self, db: AsyncSession, crew_ids: Sequence[int], status: CrewStatus
    ) -> List[int]:
        """Retourne les ids effectivement mis à jour."""
        r = await db.execute(
            update(Crew).where(Crew.id.in_(crew_ids))
            .values(status=status).returning(Crew.id)
        )
        return list(r.scalars().all())

    async def existing_ids(self, db: AsyncSession, crew_ids: Sequence[int]) -> set:
        r = await db.execute(select(Crew.id).where(Crew.id.in_(crew_ids)))
        return set(r.scalars().all())

    # ── Tags ──────────────────────────────────────────────────

    async def add_tags(self, db: AsyncSession, crew_ids: Sequence[int], tags: Sequence[str]) -> None:
        """Union atomique : les couples (crew, tag) déjà présents sont ignorés."""
        rows = [{"crew_id": cid, "tag": tag} for cid in crew_ids for tag in tags]
        if not rows:
            return
        await db.execute(
            insert(CrewTag).values(rows)
            .on_conflict_do_nothing(index_elements=["crew_id", "tag"])
        )

    async def replace_tags(self, db: AsyncSession, crew_id: int, tags: Sequence[str]) -> None:
        await db.execute(delete(CrewTag).where(CrewTag.crew_id == crew_id))
        await self.add_tags(db, [crew_id], tags)

    # ── Statistiques ──────────────────────────────────────────

    async def status_counts(self, db: AsyncSession) -> dict:
        r = await db.execute(select(Crew.status, func.count()).group_by(Crew.status))
        return {CrewStatus(status).value: count for status, count in r.all()}

    async def priority_count(self, db: AsyncSession) -> int:
        r = await db.execute(select(func.count()).select_from(Crew).where(Crew.priority.is_(True)))
        return r.scalar_one()

    async def count_by(self, db: AsyncSession, column) -> List[Tuple[str, int]]:
        count = func.count().label("count")
        r = await db.execute(
            select(column, count).group_by(column).order_by(count.desc(), column)
        )
        return [(getattr(v, "value", v), c) for v, c in r.all()]

