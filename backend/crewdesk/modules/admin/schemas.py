# modules/admin/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional
from crewdesk.modules.crew.schemas import CrewListItemOut, CrewStatsOut
from crewdesk.modules.requests.schemas import AdminRequestOut


# ── Comptes client ────────────────────────────────────────

class ClientCreateIn(BaseModel):
    company_name:   str = Field(..., min_length=1)
    email:          EmailStr
    password:       str = Field(..., min_length=6)
    contact_person: str = Field(..., min_length=1)
    phone:          Optional[str] = None
    address:        Optional[str] = None
    industry:       Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class ClientStatusIn(BaseModel):
    is_active: bool


class ClientAccountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:             int
    company_name:   str
    email:          str
    contact_person: str
    phone:          Optional[str] = None
    address:        Optional[str] = None
    industry:       Optional[str] = None
    is_active:      bool
    last_login:     Optional[datetime] = None
    created_at:     Optional[datetime] = None


class ClientPageOut(BaseModel):
    items:       List[ClientAccountOut]
    total:       int
    page:        int
    total_pages: int


# ── Tableau de bord ───────────────────────────────────────

class ClientStatsOut(BaseModel):
    total:  int = 0
    active: int = 0


class DashboardOut(BaseModel):
    crew_stats:       CrewStatsOut
    client_stats:     ClientStatsOut
    recent_crew:      List[CrewListItemOut]
    pending_requests: List[AdminRequestOut]
