# modules/client/schemas.py
"""
Vues client des dossiers marins.

Aucun de ces schemas ne déclare email, téléphone, adresse, commentaires
internes, notes admin, tags, priorité ou référence de stockage : même si un
dict en contenait, response_model les filtrerait.
"""
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from crewdesk.shared.enums import CrewRank, VesselType


class ClientCrewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:                int
    full_name:         str
    rank:              CrewRank
    nationality:       str
    current_location:  str
    date_of_birth:     Optional[date] = None
    availability_date: date
    sea_time_summary:      Optional[str] = None
    preferred_vessel_type: Optional[VesselType] = None
    additional_notes:      Optional[str] = None
    submitted_at:          Optional[datetime] = None


class ClientCrewPageOut(BaseModel):
    items:       List[ClientCrewOut]
    total:       int
    page:        int
    total_pages: int


class ClientDocumentOut(BaseModel):
    available:   bool
    restricted:  bool = False
    name:        Optional[str] = None
    uploaded_at: Optional[datetime] = None
    message:     Optional[str] = None


class ClientFiltersOut(BaseModel):
    ranks:         List[str]
    nationalities: List[str]
    vessel_types:  List[str]
