# crewdesk/shared/models/__init__.py
"""
Point d'entrée unique pour tous les modèles SQLAlchemy.

TOUJOURS importer les modèles depuis ce fichier :
  from crewdesk.shared.models import Crew, Client, ClientRequest, ...

→ Garantit que tous les modèles sont enregistrés dans Base.metadata
  avant la résolution des relations (Alembic, create_all).
"""

from crewdesk.shared.models.Account  import Admin, Client
from crewdesk.shared.models.Crew     import Crew, CrewDocument, CrewTag, CrewClientAssignment
from crewdesk.shared.models.Request  import ClientRequest, RequestFollowUp
from crewdesk.shared.models.Reminder import Reminder

__all__ = [
    # Comptes
    "Admin", "Client",
    # Marins
    "Crew", "CrewDocument", "CrewTag", "CrewClientAssignment",
    # Demandes client
    "ClientRequest", "RequestFollowUp",
    # Rappels
    "Reminder",
]
