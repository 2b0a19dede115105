# tests/modules/admin/test_router.py
import pytest
from unittest.mock import AsyncMock

from crewdesk.shared.errors import DuplicateConflict, NotFound
from tests.conftest import make_client, make_crew, make_request

pytestmark = pytest.mark.router

ROUTER = "crewdesk.modules.admin.router.service"

STATS = {
    "overview": {"total": 3, "pending": 1, "approved": 2, "rejected": 0, "missing_docs": 0, "urgent": 1},
    "rank_stats": [{"value": "Chief Officer", "count": 3}],
    "nationality_stats": [{"value": "French", "count": 3}],
}


@pytest.mark.asyncio
async def test_dashboard_client_403(client_client):
    resp = await client_client.get("/admin/dashboard")
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_dashboard_200(admin_client, mocker):
    mocker.patch(f"{ROUTER}.dashboard", AsyncMock(return_value={
        "crew_stats": STATS,
        "client_stats": {"total": 2, "active": 1},
        "recent_crew": [make_crew()],
        "pending_requests": [make_request()],
    }))

    resp = await admin_client.get("/admin/dashboard")

    assert resp.status_code == 200
    data = resp.json()
    assert data["crew_stats"]["overview"]["urgent"] == 1
    assert data["recent_crew"][0]["full_name"] == "John Mariner"
    assert data["pending_requests"][0]["client"]["company_name"] == "Blue Ocean Shipping"


@pytest.mark.asyncio
async def test_liste_clients(admin_client, mocker):
    list_clients = mocker.patch(f"{ROUTER}.list_clients", AsyncMock(return_value={
        "items": [make_client()], "total": 1, "page": 1, "total_pages": 1,
    }))
    resp = await admin_client.get("/admin/clients", params={"search": "ocean"})
    assert resp.status_code == 200
    assert "hashed_password" not in resp.json()["items"][0]
    assert list_clients.call_args.args[1] == "ocean"


CLIENT_IN = {
    "company_name": "Blue Ocean Shipping",
    "email": "ops@blueocean.com",
    "password": "secret1",
    "contact_person": "Jane Harbour",
}


@pytest.mark.asyncio
async def test_creation_client_201(admin_client, mocker):
    mocker.patch(f"{ROUTER}.create_client", AsyncMock(return_value=make_client(id=6)))
    resp = await admin_client.post("/admin/clients", json=CLIENT_IN)
    assert resp.status_code == 201
    assert resp.json()["id"] == 6


@pytest.mark.asyncio
async def test_creation_mot_de_passe_court_400(admin_client):
    resp = await admin_client.post("/admin/clients", json={**CLIENT_IN, "password": "123"})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "password"


@pytest.mark.asyncio
async def test_creation_doublon_400(admin_client, mocker):
    mocker.patch(
        f"{ROUTER}.create_client",
        AsyncMock(side_effect=DuplicateConflict("Client already exists with this email")),
    )
    resp = await admin_client.post("/admin/clients", json=CLIENT_IN)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_statut_client_404(admin_client, mocker):
    mocker.patch(f"{ROUTER}.set_client_status", AsyncMock(side_effect=NotFound("Client not found")))
    resp = await admin_client.patch("/admin/clients/9/status", json={"is_active": False})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_export_csv(admin_client, mocker):
    export = mocker.patch(f"{ROUTER}.export_crew", AsyncMock(return_value=b"Name,Email\r\nJohn,j@x.com\r\n"))

    resp = await admin_client.get("/admin/export/crew", params={"status": "approved"})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert 'filename="crew-export-' in resp.headers["content-disposition"]
    assert export.call_args.args[1].value == "approved"
