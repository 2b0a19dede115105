# modules/requests/repository.py
"""
Accès DB pour les demandes client et leurs follow-ups.

respond() est une mise à jour conditionnelle (WHERE status = 'pending') :
deux admins qui répondent en même temps ne peuvent pas tous deux réussir.
"""
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.shared.enums import FollowUpAuthor, RequestStatus
from crewdesk.shared.models import ClientRequest, RequestFollowUp


class RequestRepository:

    # ── Lecture ───────────────────────────────────────────────

    async def get(self, db: AsyncSession, request_id: int) -> Optional[ClientRequest]:
        r = await db.execute(
            select(ClientRequest).where(ClientRequest.id == request_id)
            .execution_options(populate_existing=True)
        )
        return r.scalar_one_or_none()

    async def statuses_for_pair(self, db: AsyncSession, client_id: int, crew_id: int) -> List[RequestStatus]:
        r = await db.execute(
            select(ClientRequest.status).where(
                ClientRequest.client_id == client_id,
                ClientRequest.crew_id == crew_id,
            )
        )
        return list(r.scalars().all())

    async def list_requests(
        self,
        db: AsyncSession,
        client_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[ClientRequest], int]:
        conditions = []
        if client_id is not None:
            conditions.append(ClientRequest.client_id == client_id)
        if status is not None:
            conditions.append(ClientRequest.status == status)

        total = (await db.execute(
            select(func.count()).select_from(ClientRequest).where(*conditions)
        )).scalar_one()
        r = await db.execute(
            select(ClientRequest).where(*conditions)
            .order_by(ClientRequest.requested_at.desc(), ClientRequest.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(r.scalars().all()), total

    async def recent_pending(self, db: AsyncSession, limit: int = 10) -> List[ClientRequest]:
        r = await db.execute(
            select(ClientRequest)
            .where(ClientRequest.status == RequestStatus.PENDING)
            .order_by(ClientRequest.requested_at.desc())
            .limit(limit)
        )
        return list(r.scalars().all())

    # ── Écriture ──────────────────────────────────────────────

    async def create(self, db: AsyncSession, **fields) -> ClientRequest:
        request = ClientRequest(**fields)
        db.add(request)
        await db.flush()
        return request

    async def respond(
        self,
        db: AsyncSession,
        request_id: int,
        status: RequestStatus,
        admin_response: Optional[str],
        responded_at: datetime,
    ) -> bool:
        r = await db.execute(
            update(ClientRequest)
            .where(ClientRequest.id == request_id, ClientRequest.status == RequestStatus.PENDING)
            .values(status=status, admin_response=admin_response, responded_at=responded_at)
            .returning(ClientRequest.id)
        )
        return r.first() is not None

    async def add_follow_up(
        self, db: AsyncSession, request_id: int, message: str, sent_by: FollowUpAuthor,
    ) -> RequestFollowUp:
        follow_up = RequestFollowUp(request_id=request_id, message=message, sent_by=sent_by)
        db.add(follow_up)
        await db.flush()
        return follow_up

    async def delete(self, db: AsyncSession, request_id: int) -> bool:
        r = await db.execute(
            delete(ClientRequest).where(ClientRequest.id == request_id).returning(ClientRequest.id)
        )
        return r.first() is not None
