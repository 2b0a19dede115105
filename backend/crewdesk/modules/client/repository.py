# modules/client/repository.py
"""
Lectures « côté client » des dossiers marins.

visibility_conditions() est la traduction SQL de
engine.policy.visibility.is_visible_to_client - les deux doivent rester
équivalentes (listes paginées en SQL, accès unitaire via la fonction pure).
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.engine.policy.visibility import VisibilityVariant
from crewdesk.shared.enums import CrewStatus
from crewdesk.shared.models import Crew, CrewClientAssignment

SORTABLE_FIELDS = {
    "submitted_at":      Crew.submitted_at,
    "full_name":         Crew.full_name,
    "rank":              Crew.rank,
    "nationality":       Crew.nationality,
    "availability_date": Crew.availability_date,
}


@dataclass
class ClientCrewFilters:
    rank: Optional[str] = None
    nationality: Optional[str] = None
    vessel_type: Optional[str] = None
    available_by: Optional[date] = None
    search: Optional[str] = None
    sort_by: str = "submitted_at"
    sort_order: str = "desc"
    page: int = 1
    limit: int = 10


def visibility_conditions(client_id: int, variant: VisibilityVariant) -> list:
    conditions = [
        Crew.status == CrewStatus.APPROVED,
        Crew.approved_for_clients.is_(True),
    ]
    if VisibilityVariant(variant) == VisibilityVariant.ASSIGNED:
        conditions.append(Crew.assignments.any(CrewClientAssignment.client_id == client_id))
    return conditions


class ClientCrewRepository:

    async def get_crew(self, db: AsyncSession, crew_id: int) -> Optional[Crew]:
        r = await db.execute(
            select(Crew).where(Crew.id == crew_id)
            .execution_options(populate_existing=True)
        )
        return r.scalar_one_or_none()

    async def list_visible(
        self, db: AsyncSession, client_id: int, variant: VisibilityVariant, f: ClientCrewFilters,
    ) -> Tuple[List[Crew], int]:
        conditions = visibility_conditions(client_id, variant)
        if f.rank:
            conditions.append(Crew.rank == f.rank)
        if f.nationality:
            conditions.append(Crew.nationality == f.nationality)
        if f.vessel_type:
            conditions.append(Crew.preferred_vessel_type == f.vessel_type)
        if f.available_by:
            conditions.append(Crew.availability_date <= f.available_by)
        if f.search:
            pattern = f"%{f.search}%"
            conditions.append(or_(
                Crew.full_name.ilike(pattern),
                Crew.nationality.ilike(pattern),
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

    async def shortlisted(
        self, db: AsyncSession, client_id: int, variant: VisibilityVariant,
    ) -> List[Crew]:
        conditions = visibility_conditions(client_id, variant)
        r = await db.execute(
            select(Crew)
            .where(*conditions, Crew.assignments.any(CrewClientAssignment.client_id == client_id))
            .order_by(Crew.submitted_at.desc(), Crew.id)
        )
        return list(r.scalars().all())

    async def distinct_values(
        self, db: AsyncSession, column, client_id: int, variant: VisibilityVariant,
    ) -> List[str]:
        conditions = visibility_conditions(client_id, variant)
        r = await db.execute(
            select(column).where(*conditions, column.is_not(None)).distinct().order_by(column)
        )
        return [getattr(v, "value", v) for v in r.scalars().all()]
