# tests/modules/auth/test_router.py
"""
Tests HTTP pour modules.auth.router

Pattern : httpx.AsyncClient + mocker.patch() sur service

Couverture :
    POST /auth/admin/login    → 200 + TokenOut ; identifiants faux → 400
    POST /auth/client/login   → 200 ; email invalide → 400
    POST /auth/refresh        → 200 + AccessTokenOut
    GET  /auth/me             sans jeton → 401 ; avec principal → 200
    POST /auth/admin/register admin simple → 403 ; super_admin → 201
"""
import pytest
from unittest.mock import AsyncMock

from crewdesk.modules.auth.schemas import AccessTokenOut, MeOut, TokenOut
from crewdesk.shared.enums import AdminRole, PrincipalType
from crewdesk.shared.errors import InvalidCredentials
from tests.conftest import make_admin

pytestmark = pytest.mark.router


def _token(principal_type=PrincipalType.ADMIN) -> TokenOut:
    return TokenOut(
        access_token="acc", refresh_token="ref",
        principal_type=principal_type, account_id=1, display_name="Admin User",
        admin_role=AdminRole.ADMIN if principal_type == PrincipalType.ADMIN else None,
    )


# ── Login ─────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_admin_login_200(client, mocker):
    mocker.patch("crewdesk.modules.auth.router.service.admin_login", AsyncMock(return_value=_token()))
    resp = await client.post("/auth/admin/login", json={"username": "admin", "password": "pw"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["access_token"] == "acc"
    assert data["principal_type"] == "admin"
    assert data["token_type"] == "bearer"


@pytest.mark.asyncio
async def test_admin_login_identifiants_faux_400(client, mocker):
    mocker.patch(
        "crewdesk.modules.auth.router.service.admin_login",
        AsyncMock(side_effect=InvalidCredentials()),
    )
    resp = await client.post("/auth/admin/login", json={"username": "admin", "password": "bad"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_client_login_200(client, mocker):
    mocker.patch(
        "crewdesk.modules.auth.router.service.client_login",
        AsyncMock(return_value=_token(PrincipalType.CLIENT)),
    )
    resp = await client.post("/auth/client/login", json={"email": "ops@blueocean.com", "password": "pw"})
    assert resp.status_code == 200
    assert resp.json()["principal_type"] == "client"


@pytest.mark.asyncio
async def test_client_login_email_invalide_400(client):
    resp = await client.post("/auth/client/login", json={"email": "not-an-email", "password": "pw"})
    assert resp.status_code == 400
    assert resp.json()["errors"]


@pytest.mark.asyncio
async def test_refresh_200(client, mocker):
    mocker.patch(
        "crewdesk.modules.auth.router.service.refresh",
        AsyncMock(return_value=AccessTokenOut(access_token="new")),
    )
    resp = await client.post("/auth/refresh", json={"refresh_token": "ref"})
    assert resp.status_code == 200
    assert resp.json()["access_token"] == "new"


# ── /auth/me ──────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_me_sans_jeton_401(client):
    resp = await client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_me_jeton_invalide_401(client):
    resp = await client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_me_200(admin_client, mocker):
    mocker.patch(
        "crewdesk.modules.auth.router.service.me",
        AsyncMock(return_value=MeOut(
            principal_type=PrincipalType.ADMIN, id=1, display_name="Admin User",
            email="admin@crewdesk.com", admin_role=AdminRole.ADMIN,
        )),
    )
    resp = await admin_client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["email"] == "admin@crewdesk.com"


# ── /auth/admin/register ──────────────────────────────────────────────────────

REGISTER = {"username": "ops", "email": "ops@crewdesk.com", "password": "secret1", "full_name": "Ops"}


@pytest.mark.asyncio
async def test_register_admin_simple_403(admin_client):
    resp = await admin_client.post("/auth/admin/register", json=REGISTER)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_register_client_403(client_client):
    resp = await client_client.post("/auth/admin/register", json=REGISTER)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_register_super_admin_201(super_admin_client, mocker):
    mocker.patch(
        "crewdesk.modules.auth.router.service.register_admin",
        AsyncMock(return_value=make_admin(id=2, username="ops", email="ops@crewdesk.com")),
    )
    resp = await super_admin_client.post("/auth/admin/register", json=REGISTER)
    assert resp.status_code == 201
    assert resp.json()["username"] == "ops"
    assert "hashed_password" not in resp.json()
