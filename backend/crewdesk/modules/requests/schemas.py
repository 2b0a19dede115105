# modules/requests/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from crewdesk.engine.policy.request_status import RESPOND_STATUS_MESSAGE, TERMINAL_REQUEST_STATUSES
from crewdesk.shared.enums import (
    CrewRank, FollowUpAuthor, RequestStatus, RequestType, RequestUrgency,
)


# ── Entrées ───────────────────────────────────────────────

class RequestCreateIn(BaseModel):
    crew_id:      int
    request_type: RequestType
    message:      Optional[str] = Field(None, max_length=1000)
    urgency:      RequestUrgency = RequestUrgency.NORMAL


class FollowUpIn(BaseModel):
    message: str = Field(..., min_length=1, max_length=1000)


class RespondIn(BaseModel):
    """Seule transition possible : pending → approved | rejected | completed."""
    status:         RequestStatus
    admin_response: Optional[str] = Field(None, max_length=1000)

    @field_validator("status")
    @classmethod
    def terminal_only(cls, v: RequestStatus) -> RequestStatus:
        if v not in TERMINAL_REQUEST_STATUSES:
            raise ValueError(RESPOND_STATUS_MESSAGE)
        return v


# ── Sorties ───────────────────────────────────────────────

class RequestCreatedOut(BaseModel):
    message:    str = "Request submitted successfully"
    request_id: int


class FollowUpOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:      int
    message: str
    sent_by: FollowUpAuthor
    sent_at: Optional[datetime] = None


class CrewSummaryOut(BaseModel):
    """Résumé marin côté client : jamais de coordonnées."""
    model_config = ConfigDict(from_attributes=True)

    id:          int
    full_name:   str
    rank:        CrewRank
    nationality: str


class AdminCrewSummaryOut(CrewSummaryOut):
    email: str


class ClientSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:             int
    company_name:   str
    contact_person: str
    email:          str


class ClientRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:             int
    crew_id:        int
    crew:           Optional[CrewSummaryOut] = None
    request_type:   RequestType
    message:        Optional[str] = None
    urgency:        RequestUrgency
    status:         RequestStatus
    admin_response: Optional[str] = None
    requested_at:   Optional[datetime] = None
    responded_at:   Optional[datetime] = None
    follow_ups:     List[FollowUpOut] = []


class AdminRequestOut(ClientRequestOut):
    client_id: int
    client:    Optional[ClientSummaryOut] = None
    crew:      Optional[AdminCrewSummaryOut] = None


class ClientRequestPageOut(BaseModel):
    items:       List[ClientRequestOut]
    total:       int
    page:        int
    total_pages: int


class AdminRequestPageOut(BaseModel):
    items:       List[AdminRequestOut]
    total:       int
    page:        int
    total_pages: int
