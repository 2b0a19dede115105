# tests/engine/policy/test_visibility.py
"""
Tests unitaires pour engine.policy.visibility

Couverture :
    is_visible_to_client() - variantes ASSIGNED et APPROVED :
        - approuvé + autorisé + affecté → visible
        - non affecté → invisible en ASSIGNED, visible en APPROVED
        - statut ≠ approved ou approved_for_clients=False → jamais visible
    redact_for_client() : aucune coordonnée ni note interne
"""
import pytest

from crewdesk.engine.policy.visibility import (
    CLIENT_FIELDS, VisibilityVariant,
    is_approved_for_clients, is_visible_to_client, redact_export_row, redact_for_client,
)
from crewdesk.shared.enums import CrewStatus
from tests.conftest import make_crew

pytestmark = pytest.mark.engine


class TestIsVisibleToClient:
    def test_affecte_visible(self):
        assert is_visible_to_client(make_crew(), 1, VisibilityVariant.ASSIGNED)

    def test_non_affecte_invisible_en_assigned(self):
        crew = make_crew(assigned_client_ids={2})
        assert not is_visible_to_client(crew, 1, VisibilityVariant.ASSIGNED)

    def test_non_affecte_visible_en_approved(self):
        crew = make_crew(assigned_client_ids=set())
        assert is_visible_to_client(crew, 1, VisibilityVariant.APPROVED)

    @pytest.mark.parametrize("status", [CrewStatus.PENDING, CrewStatus.REJECTED, CrewStatus.MISSING_DOCS])
    def test_statut_non_approuve(self, status):
        crew = make_crew(status=status)
        assert not is_visible_to_client(crew, 1, VisibilityVariant.ASSIGNED)
        assert not is_visible_to_client(crew, 1, VisibilityVariant.APPROVED)

    def test_non_autorise_pour_clients(self):
        crew = make_crew(approved_for_clients=False)
        assert not is_approved_for_clients(crew)
        assert not is_visible_to_client(crew, 1, VisibilityVariant.APPROVED)

    def test_dossier_absent(self):
        assert not is_visible_to_client(None, 1)

    def test_affectations_passees_explicitement(self):
        crew = make_crew(assigned_client_ids=set())
        assert is_visible_to_client(crew, 1, VisibilityVariant.ASSIGNED, assigned_client_ids=[1])


class TestRedaction:
    def test_champs_client_uniquement(self):
        row = redact_for_client(make_crew())
        assert set(row) == set(CLIENT_FIELDS)

    def test_aucun_champ_cache(self):
        row = redact_for_client(make_crew())
        private = {"email", "phone", "address", "internal_comments", "admin_notes", "tags", "priority", "documents"}
        assert not (set(row) & private)
        assert "john@seamail.com" not in str(row.values())
        assert "solid references" not in str(row.values())

    def test_export_valeurs_simples(self):
        row = redact_export_row(make_crew())
        assert row["rank"] == "Chief Officer"
        assert row["preferred_vessel_type"] == "Tanker"
