# engine/policy/crew_status.py
"""
Statut de vérification d'un dossier marin.

Énumération plate : un admin peut passer de n'importe quel statut à
n'importe quel autre (y compris le même). Aucune transition n'est
interdite - c'est volontairement différent de request_status.
"""
from crewdesk.shared.enums import CrewStatus
from crewdesk.shared.errors import ValidationFailed


def parse_crew_status(value) -> CrewStatus:
    try:
        return CrewStatus(value)
    except ValueError:
        raise ValidationFailed(
            f"Invalid crew status: {value}",
            errors=[{"field": "status", "message": "must be one of "
                     + ", ".join(s.value for s in CrewStatus)}],
        )


def transition_crew_status(current: CrewStatus, target) -> CrewStatus:
    return parse_crew_status(target)


def status_changed(current: CrewStatus, target: CrewStatus) -> bool:
    return CrewStatus(current) != CrewStatus(target)
