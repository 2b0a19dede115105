# modules/crew/service.py
"""
Orchestration des dossiers marins côté candidature publique et back-office.

Candidature (register) - ordre des contrôles :
    1. email déjà utilisé        → DuplicateConflict (400)
    2. pièces obligatoires       → ValidationFailed (400, liste des manquantes)
    3. type / taille de fichier  → ValidationFailed (400)
    4. stockage des fichiers, puis création du dossier
Rien n'est stocké tant que 1-3 ne sont pas passés. Si l'insertion échoue
(course sur l'email), les fichiers stockés sont supprimés.

Notifications : toujours planifiées via BackgroundTasks après commit.
"""
import logging
import math
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.engine.policy.bulk import BulkSummary, unique_ids
from crewdesk.engine.policy.crew_status import status_changed, transition_crew_status
from crewdesk.engine.policy.documents import (
    IncomingFile, assert_required_documents, validate_file,
)
from crewdesk.engine.policy.tags import normalize_tags, replace_tags, tags_to_add
from crewdesk.engine.policy.visibility import is_approved_for_clients, redact_export_row
from crewdesk.core.config import settings
from crewdesk.infra.export import CLIENT_SAFE_COLUMNS, crew_rows_to_csv
from crewdesk.infra.notifications import (
    Notifier, dispatch_notification, notify_admin_inbox,
    crew_registration_confirmation, crew_status_update, new_crew_application,
)
from crewdesk.infra.storage import FileStore
from crewdesk.modules.crew.repository import CrewFilters, CrewRepository
from crewdesk.modules.crew.schemas import CrewApplicationIn, CrewStatusUpdateIn
from crewdesk.shared.enums import CrewStatus, DocumentSlot, NotificationChannel
from crewdesk.shared.errors import DuplicateConflict, NotFound
from crewdesk.shared.models import Crew, CrewDocument

logger = logging.getLogger(__name__)

repo = CrewRepository()

DUPLICATE_EMAIL = "Crew member already registered with this email"


class CrewService:

    # ── Candidature publique ──────────────────────────────────

    async def register(
        self,
        db: AsyncSession,
        store: FileStore,
        payload: CrewApplicationIn,
        files: Dict[DocumentSlot, object],
        tasks: BackgroundTasks,
        notifier: Notifier,
    ) -> Crew:
        if await repo.email_exists(db, payload.email):
            raise DuplicateConflict(DUPLICATE_EMAIL)

        assert_required_documents(files.keys())

        # Lecture + validation de tous les fichiers avant tout stockage
        prepared: List[Tuple[IncomingFile, str, bytes]] = []
        for slot, upload in files.items():
            content = await upload.read()
            incoming = IncomingFile(
                slot=slot,
                filename=upload.filename,
                content_type=upload.content_type,
                size=len(content),
            )
            content_type = validate_file(incoming, settings.MAX_UPLOAD_BYTES)
            prepared.append((incoming, content_type, content))

        stored_refs: List[str] = []
        documents = []
        try:
            for incoming, content_type, content in prepared:
                ref = store.store(content, incoming.filename, content_type)
                stored_refs.append(ref)
                documents.append({
                    "slot": incoming.slot,
                    "original_name": incoming.filename,
                    "content_type": content_type,
                    "storage_ref": ref,
                    "size_bytes": incoming.size,
                })

            crew = await repo.create(db, payload.model_dump(), documents)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            self._discard_files(store, stored_refs)
            raise DuplicateConflict(DUPLICATE_EMAIL)
        except Exception:
            await db.rollback()
            self._discard_files(store, stored_refs)
            raise

        logger.info("Crew application registered: id=%s rank=%s", crew.id, payload.rank.value)
        tasks.add_task(notify_admin_inbox, notifier, new_crew_application(crew))
        tasks.add_task(
            dispatch_notification, notifier, NotificationChannel.EMAIL,
            crew.email, crew_registration_confirmation(crew),
        )
        return crew

    # ── Lecture admin ─────────────────────────────────────────

    async def list_crew(self, db: AsyncSession, filters: CrewFilters) -> dict:
        items, total = await repo.list_crew(db, filters)
        return {
            "items": items,
            "total": total,
            "page": filters.page,
            "total_pages": math.ceil(total / filters.limit) if total else 0,
        }

    async def get_crew(self, db: AsyncSession, crew_id: int) -> Crew:
        crew = await repo.get(db, crew_id)
        if crew is None:
            raise NotFound("Crew not found")
        return crew

    async def get_document(
        self, db: AsyncSession, store: FileStore, crew_id: int, slot: DocumentSlot
    ) -> Tuple[CrewDocument, bytes]:
        crew = await self.get_crew(db, crew_id)
        doc = next((d for d in crew.documents if DocumentSlot(d.slot) == slot), None)
        if doc is None:
            raise NotFound("Document not found")
        return doc, store.retrieve(doc.storage_ref)

    # ── Mise à jour admin ─────────────────────────────────────

    async def update_status(
        self,
        db: AsyncSession,
        crew_id: int,
        payload: CrewStatusUpdateIn,
        tasks: BackgroundTasks,
        notifier: Notifier,
    ) -> Crew:
        crew = await self.get_crew(db, crew_id)
        previous = crew.status
        target = transition_crew_status(previous, payload.status)

        values = {"status": target}
        for field in ("priority", "approved_for_clients", "internal_comments", "admin_notes"):
            value = getattr(payload, field)
            if value is not None:
                values[field] = value

        await repo.update_fields(db, crew_id, values)
        if payload.tags is not None:
            await repo.replace_tags(db, crew_id, replace_tags(payload.tags))
        await db.commit()

        crew = await self.get_crew(db, crew_id)
        if status_changed(previous, target):
            logger.info("Crew %s status %s -> %s", crew_id, CrewStatus(previous).value, target.value)
            tasks.add_task(
                dispatch_notification, notifier, NotificationChannel.EMAIL,
                crew.email, crew_status_update(crew),
            )
        return crew

    async def add_tags(self, db: AsyncSession, crew_id: int, tags: Sequence[str]) -> Crew:
        """Fusion : les tags existants sont conservés, seuls les absents sont insérés."""
        crew = await self.get_crew(db, crew_id)
        missing = tags_to_add(crew.tag_names, tags)
        if missing:
            await repo.add_tags(db, [crew_id], missing)
            await db.commit()
        return await self.get_crew(db, crew_id)

    # ── Opérations groupées ───────────────────────────────────

    async def bulk_update_status(
        self,
        db: AsyncSession,
        crew_ids: Sequence[int],
        status: CrewStatus,
        tasks: BackgroundTasks,
        notifier: Notifier,
    ) -> BulkSummary:
        ids = unique_ids(list(crew_ids))
        before = {c.id: c.status for c in await repo.get_many(db, ids)}
        updated = set(await repo.set_status_many(db, ids, status))
        await db.commit()

        summary = BulkSummary()
        for crew_id in ids:
            if crew_id in updated:
                summary.ok(crew_id)
            else:
                summary.fail(crew_id, "Crew not found")

        changed = [i for i in summary.succeeded_ids if status_changed(before[i], status)]
        for crew in await repo.get_many(db, changed):
            tasks.add_task(
                dispatch_notification, notifier, NotificationChannel.EMAIL,
                crew.email, crew_status_update(crew),
            )
        return summary

    async def bulk_add_tags(
        self, db: AsyncSession, crew_ids: Sequence[int], tags: Sequence[str]
    ) -> BulkSummary:
        ids = unique_ids(list(crew_ids))
        clean = normalize_tags(tags)
        existing = await repo.existing_ids(db, ids)

        await repo.add_tags(db, [i for i in ids if i in existing], clean)
        await db.commit()

        summary = BulkSummary()
        for crew_id in ids:
            if crew_id in existing:
                summary.ok(crew_id)
            else:
                summary.fail(crew_id, "Crew not found")
        return summary

    async def bulk_export(self, db: AsyncSession, crew_ids: Sequence[int]) -> Tuple[BulkSummary, bytes]:
        """Export « sûr client » : seuls les dossiers approuvés pour les clients."""
        ids = unique_ids(list(crew_ids))
        by_id = {c.id: c for c in await repo.get_many(db, ids)}

        summary = BulkSummary()
        rows = []
        for crew_id in ids:
            crew = by_id.get(crew_id)
            if crew is None:
                summary.fail(crew_id, "Crew not found")
            elif not is_approved_for_clients(crew):
                summary.fail(crew_id, "Crew not approved for clients")
            else:
                rows.append(redact_export_row(crew))
                summary.ok(crew_id)
        return summary, crew_rows_to_csv(rows, CLIENT_SAFE_COLUMNS)

    # ── Statistiques ──────────────────────────────────────────

    async def stats(self, db: AsyncSession) -> dict:
        counts = await repo.status_counts(db)
        overview = {
            "total": sum(counts.values()),
            "pending": counts.get(CrewStatus.PENDING.value, 0),
            "approved": counts.get(CrewStatus.APPROVED.value, 0),
            "rejected": counts.get(CrewStatus.REJECTED.value, 0),
            "missing_docs": counts.get(CrewStatus.MISSING_DOCS.value, 0),
            "urgent": await repo.priority_count(db),
        }
        return {
            "overview": overview,
            "rank_stats": [{"value": v, "count": c} for v, c in await repo.count_by(db, Crew.rank)],
            "nationality_stats": [
                {"value": v, "count": c} for v, c in await repo.count_by(db, Crew.nationality)
            ],
        }

    # ── Privé ─────────────────────────────────────────────────

    def _discard_files(self, store: FileStore, refs: List[str]) -> None:
        for ref in refs:
            try:
                store.delete(ref)
            except Exception:
                logger.warning("Could not remove orphan upload %s", ref)


def export_filename(prefix: str, today: Optional[date] = None) -> str:
    return f"{prefix}-{(today or date.today()).isoformat()}.csv"
