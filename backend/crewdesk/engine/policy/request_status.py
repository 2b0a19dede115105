# engine/policy/request_status.py
"""
Machine à états d'une demande client - à sens unique.

    pending ──► approved
            ├─► rejected
            └─► completed

approved / rejected / completed sont terminaux : aucune transition sortante.
Une demande ne repasse jamais en pending.

Garde anti-doublon : au plus UNE demande pending par couple (client, marin).
Les demandes successives sont permises une fois la précédente résolue.

Les follow-ups n'ont aucun effet sur le statut.
"""
from typing import Iterable

from crewdesk.shared.enums import RequestStatus
from crewdesk.shared.errors import DuplicatePendingRequest, InvalidTransition, ValidationFailed

TERMINAL_REQUEST_STATUSES: frozenset = frozenset({
    RequestStatus.APPROVED,
    RequestStatus.REJECTED,
    RequestStatus.COMPLETED,
})

RESPOND_STATUS_MESSAGE = "must be approved, rejected or completed"

ALLOWED_TRANSITIONS = {
    RequestStatus.PENDING:   TERMINAL_REQUEST_STATUSES,
    RequestStatus.APPROVED:  frozenset(),
    RequestStatus.REJECTED:  frozenset(),
    RequestStatus.COMPLETED: frozenset(),
}


def can_transition(current, target) -> bool:
    return RequestStatus(target) in ALLOWED_TRANSITIONS[RequestStatus(current)]


def transition_request_status(current, target) -> RequestStatus:
    """Cible hors {approved, rejected, completed} → 400 ; dossier déjà terminal → 409."""
    try:
        target = RequestStatus(target)
    except ValueError:
        target = None
    if target not in TERMINAL_REQUEST_STATUSES:
        raise ValidationFailed(
            "Invalid response status",
            errors=[{"field": "status", "message": RESPOND_STATUS_MESSAGE}],
        )
    current = RequestStatus(current)
    if not can_transition(current, target):
        raise InvalidTransition(
            f"Cannot move request from {current.value} to {target.value}"
        )
    return target


def assert_no_pending_duplicate(existing_statuses: Iterable) -> None:
    """`existing_statuses` : statuts des demandes du même couple (client, marin)."""
    if any(RequestStatus(s) == RequestStatus.PENDING for s in existing_statuses):
        raise DuplicatePendingRequest()
