# modules/requests/service.py
"""
Demandes client : soumission, suivi, réponse admin.

Soumission - ordre des contrôles :
    1. dossier visible pour ce client     → sinon NotFound (404)
    2. aucune demande pending sur le couple → sinon DuplicatePendingRequest (400)
    3. insertion ; l'index unique partiel couvre la course entre 2 et 3

Réponse admin : pending → approved | rejected | completed uniquement.
Le client est notifié après commit (BackgroundTasks, best-effort).
"""
import logging
import math
from datetime import datetime, timezone
from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.engine.access.principal import AdminPrincipal, ClientPrincipal
from crewdesk.engine.policy.request_status import (
    assert_no_pending_duplicate, transition_request_status,
)
from crewdesk.infra.notifications import (
    Notifier, dispatch_notification, new_client_request, notify_admin_inbox,
    request_status_update,
)
from crewdesk.modules.client.service import ClientCrewService
from crewdesk.modules.requests.repository import RequestRepository
from crewdesk.modules.requests.schemas import FollowUpIn, RequestCreateIn, RespondIn
from crewdesk.shared.enums import FollowUpAuthor, NotificationChannel, RequestStatus
from crewdesk.shared.errors import DuplicatePendingRequest, InvalidTransition, NotFound
from crewdesk.shared.models import ClientRequest

logger = logging.getLogger(__name__)

repo = RequestRepository()
client_crew_service = ClientCrewService()

REQUEST_NOT_FOUND = "Request not found"


class RequestService:

    # ── Client ────────────────────────────────────────────────

    async def submit(
        self,
        db: AsyncSession,
        client: ClientPrincipal,
        payload: RequestCreateIn,
        tasks: BackgroundTasks,
        notifier: Notifier,
    ) -> ClientRequest:
        crew = await client_crew_service.get_visible_crew(db, client, payload.crew_id)
        assert_no_pending_duplicate(await repo.statuses_for_pair(db, client.id, crew.id))

        try:
            request = await repo.create(
                db,
                client_id=client.id,
                crew_id=crew.id,
                request_type=payload.request_type,
                message=payload.message,
                urgency=payload.urgency,
                status=RequestStatus.PENDING,
            )
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise DuplicatePendingRequest()

        request = await repo.get(db, request.id)
        logger.info(
            "Client %s submitted %s request %s for crew %s",
            client.id, payload.request_type.value, request.id, crew.id,
        )
        tasks.add_task(
            notify_admin_inbox, notifier, new_client_request(request, request.client, request.crew),
        )
        return request

    async def list_own(
        self,
        db: AsyncSession,
        client: ClientPrincipal,
        status: Optional[RequestStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> dict:
        items, total = await repo.list_requests(db, client_id=client.id, status=status, page=page, limit=limit)
        return _page(items, total, page, limit)

    async def get_own(self, db: AsyncSession, client: ClientPrincipal, request_id: int) -> ClientRequest:
        request = await repo.get(db, request_id)
        # La demande d'un autre client n'existe pas pour l'appelant
        if request is None or request.client_id != client.id:
            raise NotFound(REQUEST_NOT_FOUND)
        return request

    async def client_follow_up(
        self, db: AsyncSession, client: ClientPrincipal, request_id: int, payload: FollowUpIn,
    ) -> ClientRequest:
        await self.get_own(db, client, request_id)
        await repo.add_follow_up(db, request_id, payload.message, FollowUpAuthor.CLIENT)
        await db.commit()
        return await repo.get(db, request_id)

    # ── Admin ─────────────────────────────────────────────────

    async def list_all(
        self,
        db: AsyncSession,
        status: Optional[RequestStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> dict:
        items, total = await repo.list_requests(db, status=status, page=page, limit=limit)
        return _page(items, total, page, limit)

    async def get(self, db: AsyncSession, request_id: int) -> ClientRequest:
        request = await repo.get(db, request_id)
        if request is None:
            raise NotFound(REQUEST_NOT_FOUND)
        return request

    async def respond(
        self,
        db: AsyncSession,
        admin: AdminPrincipal,
        request_id: int,
        payload: RespondIn,
        tasks: BackgroundTasks,
        notifier: Notifier,
    ) -> ClientRequest:
        request = await self.get(db, request_id)
        target = transition_request_status(request.status, payload.status)

        applied = await repo.respond(
            db, request_id, target, payload.admin_response, datetime.now(timezone.utc),
        )
        if not applied:
            # Un autre admin a répondu entre la lecture et l'écriture
            await db.rollback()
            raise InvalidTransition(f"Request {request_id} has already been answered")
        await db.commit()

        request = await repo.get(db, request_id)
        logger.info("Admin %s answered request %s: %s", admin.id, request_id, target.value)
        tasks.add_task(
            dispatch_notification, notifier, NotificationChannel.EMAIL,
            request.client.email, request_status_update(request, request.client, request.crew),
        )
        return request

    async def admin_follow_up(
        self, db: AsyncSession, admin: AdminPrincipal, request_id: int, payload: FollowUpIn,
    ) -> ClientRequest:
        await self.get(db, request_id)
        await repo.add_follow_up(db, request_id, payload.message, FollowUpAuthor.ADMIN)
        await db.commit()
        return await repo.get(db, request_id)

    async def delete(self, db: AsyncSession, admin: AdminPrincipal, request_id: int) -> None:
        if not await repo.delete(db, request_id):
            raise NotFound(REQUEST_NOT_FOUND)
        await db.commit()
        logger.warning("Super admin %s deleted request %s", admin.id, request_id)


def _page(items, total: int, page: int, limit: int) -> dict:
    return {
        "items": items,
        "total": total,
        "page": page,
        "total_pages": math.ceil(total / limit) if total else 0,
    }
