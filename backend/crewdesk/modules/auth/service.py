# modules/auth/service.py
"""
Connexion admin / client, rafraîchissement de jeton, création d'admin.

Un échec d'horodatage de last_login est journalisé et n'empêche jamais la
connexion.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from crewdesk.core.security import (
    hash_password, verify_password, create_access_token, create_refresh_token,
)
from crewdesk.engine.access.principal import AdminPrincipal, Principal, read_claims, to_principal
from crewdesk.modules.auth.repository import AuthRepository
from crewdesk.modules.auth.schemas import (
    AdminLoginIn, ClientLoginIn, AdminRegisterIn, TokenOut, AccessTokenOut, MeOut,
)
from crewdesk.shared.enums import PrincipalType
from crewdesk.shared.errors import DuplicateConflict, InactiveOrMissingAccount, InvalidCredentials
from crewdesk.shared.models import Admin, Client

logger = logging.getLogger(__name__)

repo = AuthRepository()


class AuthService:

    # ── Login ─────────────────────────────────────────────────

    async def admin_login(self, db: AsyncSession, payload: AdminLoginIn) -> TokenOut:
        admin = await repo.get_admin_by_login(db, payload.username)
        if not admin or not admin.is_active or not verify_password(payload.password, admin.hashed_password):
            raise InvalidCredentials()

        # Jetons construits avant l'horodatage : un rollback expire l'instance
        tokens = self._build_tokens(
            PrincipalType.ADMIN, admin.id, admin.full_name, admin_role=admin.role,
        )
        await self._stamp_last_login(db, Admin, tokens.account_id)
        return tokens

    async def client_login(self, db: AsyncSession, payload: ClientLoginIn) -> TokenOut:
        client = await repo.get_client_by_email(db, payload.email)
        if not client or not client.is_active or not verify_password(payload.password, client.hashed_password):
            raise InvalidCredentials()

        tokens = self._build_tokens(PrincipalType.CLIENT, client.id, client.company_name)
        await self._stamp_last_login(db, Client, tokens.account_id)
        return tokens

    # ── Refresh ───────────────────────────────────────────────

    async def refresh(self, db: AsyncSession, refresh_token: str) -> AccessTokenOut:
        claims = read_claims(refresh_token, expected_type="refresh")
        if claims.principal_type == PrincipalType.ADMIN:
            account = await repo.get_admin(db, claims.account_id)
        else:
            account = await repo.get_client(db, claims.account_id)
        principal = to_principal(claims, account)

        access_token = create_access_token(
            {"sub": str(principal.id), "role": principal.principal_type.value}
        )
        return AccessTokenOut(access_token=access_token)

    # ── Profil courant ────────────────────────────────────────

    async def me(self, db: AsyncSession, principal: Principal) -> MeOut:
        if isinstance(principal, AdminPrincipal):
            admin = await repo.get_admin(db, principal.id)
            if admin is None:
                raise InactiveOrMissingAccount()
            return MeOut(
                principal_type=PrincipalType.ADMIN,
                id=admin.id,
                display_name=admin.full_name,
                email=admin.email,
                admin_role=admin.role,
            )

        client = await repo.get_client(db, principal.id)
        if client is None:
            raise InactiveOrMissingAccount()
        return MeOut(
            principal_type=PrincipalType.CLIENT,
            id=client.id,
            display_name=client.contact_person,
            email=client.email,
            company_name=client.company_name,
        )

    # ── Comptes admin ─────────────────────────────────────────

    async def register_admin(self, db: AsyncSession, payload: AdminRegisterIn) -> Admin:
        if await repo.admin_exists(db, payload.username, payload.email):
            raise DuplicateConflict("Admin already exists with this username or email")

        admin = await repo.create_admin(
            db,
            username=payload.username,
            email=payload.email.lower(),
            full_name=payload.full_name,
            hashed_password=hash_password(payload.password),
            role=payload.role,
            is_active=True,
        )
        logger.info("Admin account created: %s (%s)", admin.username, admin.role)
        return admin

    # ── Privé ─────────────────────────────────────────────────

    async def _stamp_last_login(self, db: AsyncSession, model, account_id: int) -> None:
        try:
            await repo.touch_last_login(db, model, account_id)
        except SQLAlchemyError:
            await db.rollback()
            logger.warning("Could not record last_login for %s %s", model.__tablename__, account_id)

    def _build_tokens(
        self, principal_type: PrincipalType, account_id: int, display_name: str, admin_role=None,
    ) -> TokenOut:
        data = {"sub": str(account_id), "role": principal_type.value}
        return TokenOut(
            access_token=create_access_token(data),
            refresh_token=create_refresh_token(data),
            principal_type=principal_type,
            account_id=account_id,
            display_name=display_name,
            admin_role=admin_role,
        )
