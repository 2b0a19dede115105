# tests/engine/policy/test_crew_policies.py
"""
Tests unitaires pour engine.policy.crew_status, engine.policy.tags et
engine.policy.bulk (règles des dossiers marins côté admin).
"""
import pytest

from crewdesk.engine.policy.bulk import BulkSummary, unique_ids
from crewdesk.engine.policy.crew_status import parse_crew_status, status_changed, transition_crew_status
from crewdesk.engine.policy.tags import normalize_tags, replace_tags, tags_to_add
from crewdesk.shared.enums import CrewStatus
from crewdesk.shared.errors import ValidationFailed

pytestmark = pytest.mark.engine


# ── Statut marin ──────────────────────────────────────────────────────────────

class TestCrewStatus:
    @pytest.mark.parametrize("current", list(CrewStatus))
    @pytest.mark.parametrize("target", list(CrewStatus))
    def test_toute_transition_permise(self, current, target):
        assert transition_crew_status(current, target) == target

    def test_statut_inconnu(self):
        with pytest.raises(ValidationFailed):
            parse_crew_status("hired")

    def test_status_changed(self):
        assert status_changed(CrewStatus.PENDING, CrewStatus.APPROVED)
        assert not status_changed("approved", CrewStatus.APPROVED)


# ── Tags ──────────────────────────────────────────────────────────────────────

class TestTags:
    def test_normalisation(self):
        assert normalize_tags([" visa ", "", "visa", "dp2"]) == ["visa", "dp2"]

    def test_tag_trop_long(self):
        with pytest.raises(ValidationFailed):
            normalize_tags(["x" * 51])

    def test_fusion_ne_retient_que_les_absents(self):
        assert tags_to_add(["a", "b"], ["b", "c"]) == ["c"]

    def test_fusion_idempotente(self):
        assert tags_to_add(["a", "b"], ["b"]) == []

    def test_fusion_normalise_les_deux_cotes(self):
        assert tags_to_add([" a "], ["a", " b ", "b"]) == ["b"]

    def test_replace_remplace(self):
        assert replace_tags(["c"]) == ["c"]
        assert replace_tags([]) == []


# ── Résultats groupés ─────────────────────────────────────────────────────────

class TestBulkSummary:
    def test_comptes(self):
        summary = BulkSummary()
        summary.ok(1)
        summary.fail(2, "Crew not found")
        summary.ok(3)
        assert (summary.total, summary.successful, summary.failed) == (3, 2, 1)
        assert summary.succeeded_ids == [1, 3]

    def test_to_dict(self):
        summary = BulkSummary()
        summary.ok(1)
        summary.fail(2, "Crew not found")
        assert summary.to_dict()["results"] == [
            {"id": 1, "success": True},
            {"id": 2, "success": False, "reason": "Crew not found"},
        ]

    def test_unique_ids_conserve_ordre(self):
        assert unique_ids([3, 1, 3, 2, 1]) == [3, 1, 2]
