# engine/policy/visibility.py
"""
Visibilité d'un dossier marin pour un client + projection expurgée.

Deux variantes (réglage de déploiement CLIENT_VISIBILITY) :

    ASSIGNED (défaut) :
        status == approved  ET  approved_for_clients  ET  client ∈ affectations
    APPROVED :
        status == approved  ET  approved_for_clients

La même variante s'applique partout : liste, détail, pièces, filtres,
shortlist et dépôt de demande.

Projection client :
    Liste blanche CLIENT_FIELDS. Ne contient jamais email, téléphone,
    adresse, commentaires internes, notes admin, tags, priorité ni
    référence de stockage de pièce.
"""
from __future__ import annotations
from enum import Enum
from typing import Iterable, Optional

from crewdesk.shared.enums import CrewStatus


class VisibilityVariant(str, Enum):
    ASSIGNED = "assigned"
    APPROVED = "approved"


CLIENT_FIELDS: tuple = (
    "id",
    "full_name",
    "rank",
    "nationality",
    "current_location",
    "date_of_birth",
    "availability_date",
    "sea_time_summary",
    "preferred_vessel_type",
    "additional_notes",
    "submitted_at",
)


def is_approved_for_clients(crew) -> bool:
    return CrewStatus(crew.status) == CrewStatus.APPROVED and bool(crew.approved_for_clients)


def is_visible_to_client(
    crew,
    client_id: int,
    variant: VisibilityVariant = VisibilityVariant.ASSIGNED,
    assigned_client_ids: Optional[Iterable[int]] = None,
) -> bool:
    """
    `assigned_client_ids` permet de passer l'ensemble déjà chargé ; sinon on
    lit crew.assigned_client_ids.
    """
    if crew is None or not is_approved_for_clients(crew):
        return False
    if VisibilityVariant(variant) == VisibilityVariant.APPROVED:
        return True
    ids = assigned_client_ids if assigned_client_ids is not None else crew.assigned_client_ids
    return client_id in set(ids)


def redact_for_client(crew) -> dict:
    return {field: getattr(crew, field, None) for field in CLIENT_FIELDS}


def redact_export_row(crew) -> dict:
    """Ligne d'export « sûre client » : mêmes champs que la projection client."""
    row = redact_for_client(crew)
    for key in ("rank", "preferred_vessel_type"):
        value = row.get(key)
        row[key] = getattr(value, "value", value)
    return row
