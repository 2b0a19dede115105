# tests/modules/client/test_service.py
"""
Tests unitaires pour modules.client.service.ClientCrewService

Couverture :
    get_crew() :
        - Dossier affecté et approuvé → projection expurgée
        - Non affecté / non approuvé / inexistant → même 404
        - Variante "approved" → affectation ignorée

    list_crew() : pagination + projection expurgée

    view_document() :
        - CV → 403 avant toute lecture du dossier
        - Emplacement inconnu → 403
        - Pièce absente → 404
        - Succès → contenu du stockage
        - Livret marin servi sous le nom "seamanBook"

    list_documents() : CV marqué "restricted", jamais de référence de stockage
    download_cv()    : toujours 403

    Scénario complet (SQLite réelle) : dossier affecté à C1 → C1 le liste et
    le consulte, C2 ne le voit pas (404) sauf en variante "approved"
"""
import pytest
from unittest.mock import AsyncMock

from crewdesk.engine.access.principal import ClientPrincipal
from crewdesk.modules.client.repository import ClientCrewFilters
from crewdesk.modules.client.service import NOT_VISIBLE, ClientCrewService
from crewdesk.shared.enums import CrewStatus, DocumentSlot
from crewdesk.shared.errors import DocumentAccessDenied, NotFound
from tests.conftest import (
    FakeFileStore, make_async_db, make_crew, make_document, seed_client, seed_crew,
)

pytestmark = pytest.mark.service

service = ClientCrewService()
SVC = "crewdesk.modules.client.service"
CLIENT = ClientPrincipal(id=1)


# ── Visibilité ────────────────────────────────────────────────────────────────

class TestGetCrew:
    @pytest.mark.asyncio
    async def test_visible_expurge(self, mocker):
        mocker.patch(f"{SVC}.repo.get_crew", AsyncMock(return_value=make_crew()))

        result = await service.get_crew(make_async_db(), CLIENT, 1)

        assert result["full_name"] == "John Mariner"
        for hidden in ("email", "phone", "internal_comments", "admin_notes", "tags", "priority"):
            assert hidden not in result

    @pytest.mark.asyncio
    @pytest.mark.parametrize("crew", [
        make_crew(assigned_client_ids={2}),
        make_crew(status=CrewStatus.PENDING),
        make_crew(approved_for_clients=False),
        None,
    ])
    async def test_non_visible_404(self, mocker, crew):
        mocker.patch(f"{SVC}.repo.get_crew", AsyncMock(return_value=crew))
        with pytest.raises(NotFound) as exc:
            await service.get_crew(make_async_db(), CLIENT, 1)
        assert exc.value.detail == NOT_VISIBLE

    @pytest.mark.asyncio
    async def test_variante_approved(self, mocker):
        mocker.patch(f"{SVC}.settings.CLIENT_VISIBILITY", "approved")
        mocker.patch(f"{SVC}.repo.get_crew", AsyncMock(return_value=make_crew(assigned_client_ids=set())))
        result = await service.get_crew(make_async_db(), CLIENT, 1)
        assert result["id"] == 1


class TestListCrew:
    @pytest.mark.asyncio
    async def test_pagination(self, mocker):
        list_visible = mocker.patch(
            f"{SVC}.repo.list_visible",
            AsyncMock(return_value=([make_crew(id=1), make_crew(id=2)], 12)),
        )

        result = await service.list_crew(make_async_db(), CLIENT, ClientCrewFilters(page=2, limit=5))

        assert (result["total"], result["page"], result["total_pages"]) == (12, 2, 3)
        assert [c["id"] for c in result["items"]] == [1, 2]
        assert "email" not in result["items"][0]
        assert list_visible.call_args.args[1] == 1


# ── Pièces ────────────────────────────────────────────────────────────────────

class TestDocuments:
    @pytest.mark.asyncio
    async def test_cv_refuse_avant_lecture(self, mocker):
        get_crew = mocker.patch(f"{SVC}.repo.get_crew", AsyncMock())
        with pytest.raises(DocumentAccessDenied):
            await service.view_document(make_async_db(), FakeFileStore(), CLIENT, 1, "cv")
        get_crew.assert_not_called()

    @pytest.mark.asyncio
    async def test_emplacement_inconnu_refuse(self, mocker):
        mocker.patch(f"{SVC}.repo.get_crew", AsyncMock())
        with pytest.raises(DocumentAccessDenied):
            await service.view_document(make_async_db(), FakeFileStore(), CLIENT, 1, "diploma")

    @pytest.mark.asyncio
    async def test_piece_absente_404(self, mocker):
        mocker.patch(f"{SVC}.repo.get_crew", AsyncMock(return_value=make_crew(documents=[make_document()])))
        with pytest.raises(NotFound):
            await service.view_document(make_async_db(), FakeFileStore(), CLIENT, 1, "visa")

    @pytest.mark.asyncio
    async def test_consultation(self, mocker):
        doc = make_document(storage_ref="ref-1-passport.pdf")
        mocker.patch(f"{SVC}.repo.get_crew", AsyncMock(return_value=make_crew(documents=[doc])))
        store = FakeFileStore({"ref-1-passport.pdf": b"%PDF"})

        result_doc, content = await service.view_document(make_async_db(), store, CLIENT, 1, "passport")

        assert result_doc is doc
        assert content == b"%PDF"

    @pytest.mark.asyncio
    async def test_consultation_seaman_book(self, mocker):
        doc = make_document(slot=DocumentSlot.SEAMAN_BOOK, storage_ref="ref-seaman.pdf")
        mocker.patch(f"{SVC}.repo.get_crew", AsyncMock(return_value=make_crew(documents=[doc])))
        store = FakeFileStore({"ref-seaman.pdf": b"%PDF"})

        result_doc, content = await service.view_document(make_async_db(), store, CLIENT, 1, "seamanBook")

        assert result_doc is doc
        assert content == b"%PDF"

    @pytest.mark.asyncio
    async def test_liste_cv_restreint(self, mocker):
        documents = [
            make_document(slot=DocumentSlot.CV, original_name="cv.pdf", storage_ref="ref-cv"),
            make_document(),
        ]
        mocker.patch(f"{SVC}.repo.get_crew", AsyncMock(return_value=make_crew(documents=documents)))

        result = await service.list_documents(make_async_db(), CLIENT, 1)

        assert result["cv"]["restricted"] is True
        assert result["cv"]["available"] is False
        assert result["passport"]["name"] == "passport.pdf"
        assert "storage_ref" not in result["passport"]

    @pytest.mark.asyncio
    async def test_telechargement_cv_toujours_refuse(self):
        with pytest.raises(DocumentAccessDenied):
            await service.download_cv(make_async_db(), CLIENT, 1)


class TestFilters:
    @pytest.mark.asyncio
    async def test_valeurs_distinctes(self, mocker):
        mocker.patch(f"{SVC}.repo.distinct_values", AsyncMock(side_effect=[
            ["Bosun"], ["French"], ["Tanker"],
        ]))
        result = await service.filters(make_async_db(), CLIENT)
        assert result == {"ranks": ["Bosun"], "nationalities": ["French"], "vessel_types": ["Tanker"]}


# ── Scénario deux clients (session réelle) ────────────────────────────────────

class TestTwoClients:
    async def _seed(self, db):
        c1 = await seed_client(db, "c1@ocean.com", "Client One")
        c2 = await seed_client(db, "c2@ocean.com", "Client Two")
        crew = await seed_crew(db, assigned_client_ids=[c1.id])
        return ClientPrincipal(id=c1.id), ClientPrincipal(id=c2.id), crew.id

    @pytest.mark.asyncio
    async def test_c1_liste_c2_non(self, sqlite_db):
        c1, c2, crew_id = await self._seed(sqlite_db)

        listed = await service.list_crew(sqlite_db, c1, ClientCrewFilters())
        assert [c["id"] for c in listed["items"]] == [crew_id]
        assert "email" not in listed["items"][0]
        assert (await service.get_crew(sqlite_db, c1, crew_id))["full_name"] == "John Mariner"

        assert (await service.list_crew(sqlite_db, c2, ClientCrewFilters()))["total"] == 0
        with pytest.raises(NotFound) as exc:
            await service.get_crew(sqlite_db, c2, crew_id)
        assert exc.value.detail == NOT_VISIBLE

    @pytest.mark.asyncio
    async def test_variante_approved_c2_voit(self, sqlite_db, mocker):
        mocker.patch(f"{SVC}.settings.CLIENT_VISIBILITY", "approved")
        _, c2, crew_id = await self._seed(sqlite_db)

        listed = await service.list_crew(sqlite_db, c2, ClientCrewFilters())

        assert [c["id"] for c in listed["items"]] == [crew_id]
        assert (await service.get_crew(sqlite_db, c2, crew_id))["id"] == crew_id
