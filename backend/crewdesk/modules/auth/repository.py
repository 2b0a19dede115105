# modules/auth/repository.py
"""Accès DB pour les comptes Admin / Client (authentification)."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.shared.models import Admin, Client


class AuthRepository:

    # ── Lecture ───────────────────────────────────────────────

    async def get_admin_by_login(self, db: AsyncSession, login: str) -> Optional[Admin]:
        r = await db.execute(
            select(Admin).where(or_(Admin.username == login, Admin.email == login.lower()))
        )
        return r.scalar_one_or_none()

    async def get_client_by_email(self, db: AsyncSession, email: str) -> Optional[Client]:
        r = await db.execute(select(Client).where(Client.email == email.lower()))
        return r.scalar_one_or_none()

    async def get_admin(self, db: AsyncSession, admin_id: int) -> Optional[Admin]:
        return await db.get(Admin, admin_id)

    async def get_client(self, db: AsyncSession, client_id: int) -> Optional[Client]:
        return await db.get(Client, client_id)

    async def admin_exists(self, db: AsyncSession, username: str, email: str) -> bool:
        r = await db.execute(
            select(Admin.id).where(or_(Admin.username == username, Admin.email == email.lower()))
        )
        return r.first() is not None

    # ── Écriture ──────────────────────────────────────────────

    async def create_admin(self, db: AsyncSession, **fields) -> Admin:
        admin = Admin(**fields)
        db.add(admin)
        await db.commit()
        await db.refresh(admin)
        return admin

    async def touch_last_login(self, db: AsyncSession, model, account_id: int) -> None:
        await db.execute(
            update(model)
            .where(model.id == account_id)
            .values(last_login=datetime.now(timezone.utc))
        )
        await db.commit()
