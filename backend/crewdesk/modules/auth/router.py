# modules/auth/router.py
from fastapi import APIRouter
from crewdesk.modules.auth.schemas import (
    AdminLoginIn, ClientLoginIn, TokenOut, RefreshIn, AccessTokenOut,
    AdminRegisterIn, AdminOut, MeOut,
)
from crewdesk.modules.auth.service import AuthService
from crewdesk.shared.deps import DbDep, PrincipalDep, SuperAdminDep

router = APIRouter(prefix="/auth", tags=["Auth"])
service = AuthService()


@router.post("/admin/login", response_model=TokenOut)
async def admin_login(payload: AdminLoginIn, db: DbDep):
    return await service.admin_login(db, payload)


@router.post("/client/login", response_model=TokenOut)
async def client_login(payload: ClientLoginIn, db: DbDep):
    return await service.client_login(db, payload)


@router.post("/refresh", response_model=AccessTokenOut)
async def refresh(payload: RefreshIn, db: DbDep):
    return await service.refresh(db, payload.refresh_token)


@router.get("/me", response_model=MeOut)
async def me(principal: PrincipalDep, db: DbDep):
    """Infos minimales du compte porteur du jeton (admin ou client)."""
    return await service.me(db, principal)


@router.post("/admin/register", response_model=AdminOut, status_code=201)
async def register_admin(payload: AdminRegisterIn, admin: SuperAdminDep, db: DbDep):
    """Création d'un compte admin - réservé au super_admin."""
    return await service.register_admin(db, payload)
