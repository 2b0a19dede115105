# crewdesk/shared/deps.py
"""
Dépendances FastAPI réutilisables dans tous les routers.
Injectées via Depends() - jamais appelées directement.

Chaîne d'authentification :
    bearer → read_claims → chargement du compte → to_principal → require
Toute erreur est une DomainError (401/403) rendue par le handler de main.py.
"""
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.core.database import get_db
from crewdesk.engine.access.guard import require, require_admin_role
from crewdesk.engine.access.principal import (
    AdminPrincipal, ClientPrincipal, Principal, TokenClaims, read_claims, to_principal,
)
from crewdesk.infra.notifications import Notifier, get_notifier
from crewdesk.infra.storage import FileStore, get_file_store
from crewdesk.shared.enums import AdminRole, PrincipalType
from crewdesk.shared.errors import Unauthenticated
from crewdesk.shared.models import Admin, Client

bearer = HTTPBearer(auto_error=False)


async def load_account(db: AsyncSession, claims: TokenClaims):
    model = Admin if claims.principal_type == PrincipalType.ADMIN else Client
    result = await db.execute(select(model).where(model.id == claims.account_id))
    return result.scalar_one_or_none()


async def get_token_principal(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    claims = read_claims(credentials.credentials)
    account = await load_account(db, claims)
    return to_principal(claims, account)


# ── Deps publiques ─────────────────────────────────────────

async def get_current_principal(
    principal: Annotated[Principal, Depends(get_token_principal)],
) -> Principal:
    """Principal authentifié (admin ou client)."""
    return principal


async def get_current_admin(
    principal: Annotated[Principal, Depends(get_token_principal)],
) -> AdminPrincipal:
    """Exige un AdminPrincipal actif."""
    return require(principal, PrincipalType.ADMIN)


async def get_current_client(
    principal: Annotated[Principal, Depends(get_token_principal)],
) -> ClientPrincipal:
    """Exige un ClientPrincipal actif."""
    return require(principal, PrincipalType.CLIENT)


async def get_super_admin(
    admin: Annotated[AdminPrincipal, Depends(get_current_admin)],
) -> AdminPrincipal:
    """Exige le rôle super_admin."""
    return require_admin_role(admin, AdminRole.SUPER_ADMIN)


# ── Type aliases pour les routers ─────────────────────────
DbDep         = Annotated[AsyncSession, Depends(get_db)]
PrincipalDep  = Annotated[Principal, Depends(get_current_principal)]
AdminDep      = Annotated[AdminPrincipal, Depends(get_current_admin)]
ClientDep     = Annotated[ClientPrincipal, Depends(get_current_client)]
SuperAdminDep = Annotated[AdminPrincipal, Depends(get_super_admin)]
NotifierDep   = Annotated[Notifier, Depends(get_notifier)]
FileStoreDep  = Annotated[FileStore, Depends(get_file_store)]
