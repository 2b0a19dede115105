# tests/conftest.py
"""
Fixtures et factories partagées sur l'ensemble de la suite de tests.

Trois couches :
    1. Engine  - fonctions pures, aucun mock nécessaire
    2. Service - mocks AsyncSession + repos via pytest-mock, ou session
                 SQLite réelle (sqlite_db) quand le cycle de vie ORM compte
    3. Router  - httpx.AsyncClient + dependency_overrides FastAPI

Les fixtures HTTP surchargent get_token_principal (et non les gardes) :
les gardes admin / client / super_admin s'exécutent réellement.
"""
import pytest
from types import SimpleNamespace
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from crewdesk.main import app
from crewdesk.core.database import Base, get_db
from crewdesk.engine.access.principal import AdminPrincipal, ClientPrincipal
from crewdesk.infra.notifications import get_notifier
from crewdesk.infra.storage import StoredFileNotFound, get_file_store
from crewdesk.shared.deps import get_token_principal
from crewdesk.shared.models import Client, Crew, CrewClientAssignment
from crewdesk.shared.enums import (
    AdminRole, CrewRank, CrewStatus, DocumentSlot, FollowUpAuthor,
    ReminderPriority, ReminderStatus, RequestStatus, RequestType, RequestUrgency,
    VesselType,
)


# ── Factories de modèles ORM (SimpleNamespace - léger, sans ORM) ──────────────

def make_admin(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "username": "admin",
        "email": "admin@crewdesk.com",
        "full_name": "Admin User",
        "hashed_password": "hashed_password",
        "role": AdminRole.ADMIN,
        "is_active": True,
        "last_login": None,
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_client(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "company_name": "Blue Ocean Shipping",
        "email": "ops@blueocean.com",
        "hashed_password": "hashed_password",
        "contact_person": "Jane Harbour",
        "phone": "+971500000000",
        "address": "Dubai Maritime City",
        "industry": "Offshore",
        "is_active": True,
        "last_login": None,
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_document(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "crew_id": 1,
        "slot": DocumentSlot.PASSPORT,
        "original_name": "passport.pdf",
        "content_type": "application/pdf",
        "storage_ref": "ref-passport.pdf",
        "size_bytes": 1024,
        "uploaded_at": datetime(2025, 1, 2, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_crew(**kwargs) -> SimpleNamespace:
    """
    Marin approuvé pour les clients et affecté au client 1 par défaut.
    `assigned_client_ids` et `tags` (liste de str) sont convertis en
    relations SimpleNamespace pour imiter le modèle ORM.
    """
    assigned = kwargs.pop("assigned_client_ids", {1})
    tags = kwargs.pop("tags", [])
    defaults = {
        "id": 1,
        "full_name": "John Mariner",
        "email": "john@seamail.com",
        "phone": "+33600000000",
        "address": None,
        "date_of_birth": date(1988, 5, 14),
        "rank": CrewRank.CHIEF_OFFICER,
        "nationality": "French",
        "current_location": "Marseille",
        "availability_date": date(2025, 3, 1),
        "sea_time_summary": "8 years on tankers",
        "preferred_vessel_type": VesselType.TANKER,
        "additional_notes": None,
        "status": CrewStatus.APPROVED,
        "priority": False,
        "internal_comments": "solid references",
        "admin_notes": "called twice",
        "approved_for_clients": True,
        "submitted_at": datetime(2025, 1, 2, tzinfo=timezone.utc),
        "last_updated": datetime(2025, 1, 3, tzinfo=timezone.utc),
        "documents": [],
    }
    defaults.update(kwargs)
    crew = SimpleNamespace(**defaults)
    crew.tags = [SimpleNamespace(tag=t) for t in tags]
    crew.assignments = [SimpleNamespace(client_id=c) for c in assigned]
    crew.assigned_client_ids = set(assigned)
    crew.tag_names = sorted(tags)
    return crew


def make_follow_up(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "request_id": 1,
        "message": "Any update?",
        "sent_by": FollowUpAuthor.CLIENT,
        "sent_at": datetime(2025, 1, 5, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_request(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "client_id": 1,
        "crew_id": 1,
        "request_type": RequestType.INTERVIEW,
        "message": "Available for a call next week?",
        "urgency": RequestUrgency.NORMAL,
        "status": RequestStatus.PENDING,
        "admin_response": None,
        "requested_at": datetime(2025, 1, 4, tzinfo=timezone.utc),
        "responded_at": None,
        "follow_ups": [],
    }
    defaults.update(kwargs)
    req = SimpleNamespace(**defaults)
    if not hasattr(req, "client"):
        req.client = make_client(id=req.client_id)
    if not hasattr(req, "crew"):
        req.crew = make_crew(id=req.crew_id)
    return req


def make_reminder(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "title": "Check visa expiry",
        "description": None,
        "crew_id": None,
        "client_id": None,
        "priority": ReminderPriority.MEDIUM,
        "due_date": datetime(2030, 1, 1, tzinfo=timezone.utc),
        "status": ReminderStatus.PENDING,
        "created_by_id": 1,
        "assigned_to_id": None,
        "tags": [],
        "notes": None,
        "completed_at": None,
        "completed_by_id": None,
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


# ── Collaborateurs factices ───────────────────────────────────────────────────

class FakeNotifier:
    """Enregistre les envois ; `fail=True` simule une panne du canal."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list = []

    def notify(self, channel, target, payload):
        if self.fail:
            raise RuntimeError("smtp down")
        self.sent.append((channel, target, payload))


class FakeFileStore:
    """Stockage mémoire : référence = nom généré séquentiellement."""

    def __init__(self, files: dict = None):
        self.files = dict(files or {})
        self.deleted: list = []

    def store(self, content: bytes, filename: str, content_type: str) -> str:
        reference = f"ref-{len(self.files) + 1}-{filename}"
        self.files[reference] = content
        return reference

    def retrieve(self, reference: str) -> bytes:
        if reference not in self.files:
            raise StoredFileNotFound()
        return self.files[reference]

    def delete(self, reference: str) -> None:
        self.files.pop(reference, None)
        self.deleted.append(reference)


# ── DB mock factory ───────────────────────────────────────────────────────────

def make_async_db() -> AsyncMock:
    """
    AsyncMock simulant une AsyncSession SQLAlchemy.
    flush() attribue un id aux objets ajoutés qui n'en ont pas.
    """
    db = AsyncMock(spec=AsyncSession)
    added_objects: list = []

    def capture_add(obj):
        added_objects.append(obj)

    db.add = MagicMock(side_effect=capture_add)

    async def flush_side_effect():
        for i, obj in enumerate(added_objects):
            if not getattr(obj, "id", None):
                try:
                    obj.id = i + 1
                except (AttributeError, TypeError):
                    pass

    db.flush = AsyncMock(side_effect=flush_side_effect)
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.close = AsyncMock()
    db.added = added_objects

    return db


# ── Fixtures HTTP (httpx.AsyncClient + dependency_overrides) ─────────────────

@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def file_store():
    return FakeFileStore()


async def _http_client(principal, notifier, file_store):
    mock_db = make_async_db()
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_file_store] = lambda: file_store
    if principal is not None:
        app.dependency_overrides[get_token_principal] = lambda: principal
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(notifier, file_store):
    """Client sans auth - endpoints publics, ou vérification du 401."""
    async with await _http_client(None, notifier, file_store) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(notifier, file_store):
    """Authentifié comme AdminPrincipal (rôle admin)."""
    principal = AdminPrincipal(id=1, role=AdminRole.ADMIN)
    async with await _http_client(principal, notifier, file_store) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def super_admin_client(notifier, file_store):
    """Authentifié comme AdminPrincipal (rôle super_admin)."""
    principal = AdminPrincipal(id=1, role=AdminRole.SUPER_ADMIN)
    async with await _http_client(principal, notifier, file_store) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def client_client(notifier, file_store):
    """Authentifié comme ClientPrincipal (client 1)."""
    principal = ClientPrincipal(id=1)
    async with await _http_client(principal, notifier, file_store) as c:
        yield c
    app.dependency_overrides.clear()


# ── Session réelle (SQLite mémoire via aiosqlite) ────────────────────────────

@pytest.fixture
async def sqlite_db():
    """
    AsyncSession réelle : commit / rollback et expiration des instances se
    comportent comme en production, contrairement à make_async_db().
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with session_factory() as session:
        yield session
    await engine.dispose()


async def seed_crew(db, assigned_client_ids=(), **kwargs):
    """Insère un dossier marin approuvé (et ses affectations) dans une session réelle."""
    fields = {
        "full_name": "John Mariner",
        "email": "john@seamail.com",
        "phone": "+33600000000",
        "date_of_birth": date(1988, 5, 14),
        "rank": CrewRank.CHIEF_OFFICER,
        "nationality": "French",
        "current_location": "Marseille",
        "availability_date": date(2025, 3, 1),
        "preferred_vessel_type": VesselType.TANKER,
        "status": CrewStatus.APPROVED,
        "approved_for_clients": True,
    }
    fields.update(kwargs)
    crew = Crew(**fields)
    db.add(crew)
    await db.flush()
    for client_id in assigned_client_ids:
        db.add(CrewClientAssignment(crew_id=crew.id, client_id=client_id))
    await db.commit()
    return crew


async def seed_client(db, email: str, company_name: str = "Blue Ocean Shipping"):
    client = Client(
        company_name=company_name, email=email,
        hashed_password="hashed", contact_person="Jane Harbour",
    )
    db.add(client)
    await db.commit()
    return client
