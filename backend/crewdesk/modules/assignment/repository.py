# modules/assignment/repository.py
"""
Ensemble des affectations marin ↔ client.

assign()   : INSERT … ON CONFLICT DO NOTHING - idempotent, sans course
unassign() : DELETE … WHERE - absent = succès
"""
from typing import List, Sequence

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.shared.models import Client, Crew, CrewClientAssignment


class AssignmentRepository:

    async def crew_exists(self, db: AsyncSession, crew_id: int) -> bool:
        r = await db.execute(select(Crew.id).where(Crew.id == crew_id))
        return r.first() is not None

    async def client_exists(self, db: AsyncSession, client_id: int) -> bool:
        r = await db.execute(select(Client.id).where(Client.id == client_id))
        return r.first() is not None

    async def existing_crew_ids(self, db: AsyncSession, crew_ids: Sequence[int]) -> set:
        r = await db.execute(select(Crew.id).where(Crew.id.in_(crew_ids)))
        return set(r.scalars().all())

    async def assign(self, db: AsyncSession, crew_ids: Sequence[int], client_id: int) -> List[int]:
        """Retourne les crew_id nouvellement affectés (déjà présents → ignorés)."""
        if not crew_ids:
            return []
        r = await db.execute(
            insert(CrewClientAssignment)
            .values([{"crew_id": cid, "client_id": client_id} for cid in crew_ids])
            .on_conflict_do_nothing(index_elements=["crew_id", "client_id"])
            .returning(CrewClientAssignment.crew_id)
        )
        return list(r.scalars().all())

    async def unassign(self, db: AsyncSession, crew_id: int, client_id: int) -> bool:
        r = await db.execute(
            delete(CrewClientAssignment)
            .where(
                CrewClientAssignment.crew_id == crew_id,
                CrewClientAssignment.client_id == client_id,
            )
            .returning(CrewClientAssignment.id)
        )
        return r.first() is not None

    async def clients_for_crew(self, db: AsyncSession, crew_id: int) -> List[Client]:
        r = await db.execute(
            select(Client)
            .join(CrewClientAssignment, CrewClientAssignment.client_id == Client.id)
            .where(CrewClientAssignment.crew_id == crew_id)
            .order_by(Client.company_name)
        )
        return list(r.scalars().all())
