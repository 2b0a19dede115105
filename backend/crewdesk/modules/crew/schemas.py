# modules/crew/schemas.py
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Literal, Optional
from crewdesk.shared.enums import CrewRank, CrewStatus, DocumentSlot, VesselType


# ── Candidature (formulaire public multipart) ─────────────

class CrewApplicationIn(BaseModel):
    full_name:         str = Field(..., min_length=1, max_length=100)
    email:             EmailStr
    phone:             str = Field(..., min_length=1)
    rank:              CrewRank
    nationality:       str = Field(..., min_length=1)
    current_location:  str = Field(..., min_length=1)
    date_of_birth:     date
    availability_date: date
    sea_time_summary:      Optional[str] = None
    preferred_vessel_type: Optional[VesselType] = None
    additional_notes:      Optional[str] = None

    @field_validator("full_name", "phone", "nationality", "current_location")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("preferred_vessel_type", mode="before")
    @classmethod
    def empty_vessel_type(cls, v):
        return v or None


class CrewRegisteredOut(BaseModel):
    message: str = "Crew registration successful"
    crew_id: int


# ── Lecture admin ─────────────────────────────────────────

class CrewDocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slot:          DocumentSlot
    original_name: str
    content_type:  str
    size_bytes:    Optional[int] = None
    uploaded_at:   Optional[datetime] = None


class CrewListItemOut(BaseModel):
    """Vue liste admin : pas de pièces."""
    model_config = ConfigDict(from_attributes=True)

    id:                int
    full_name:         str
    email:             str
    phone:             str
    rank:              CrewRank
    nationality:       str
    current_location:  str
    date_of_birth:     date
    availability_date: date
    preferred_vessel_type: Optional[VesselType] = None
    status:               CrewStatus
    priority:             bool
    approved_for_clients: bool
    tags:                 List[str] = []
    submitted_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def tag_strings(cls, v):
        return sorted(getattr(t, "tag", t) for t in (v or []))


class CrewDetailOut(CrewListItemOut):
    sea_time_summary:  Optional[str] = None
    additional_notes:  Optional[str] = None
    internal_comments: Optional[str] = None
    admin_notes:       Optional[str] = None
    documents:           List[CrewDocumentOut] = []
    assigned_client_ids: List[int] = []

    @field_validator("assigned_client_ids", mode="before")
    @classmethod
    def sorted_ids(cls, v):
        return sorted(v or [])


class CrewPageOut(BaseModel):
    items:       List[CrewListItemOut]
    total:       int
    page:        int
    total_pages: int


# ── Écriture admin ────────────────────────────────────────

class CrewStatusUpdateIn(BaseModel):
    """`tags`, si fourni, REMPLACE l'ensemble des tags."""
    status:               CrewStatus
    priority:             Optional[bool] = None
    approved_for_clients: Optional[bool] = None
    internal_comments:    Optional[str] = None
    admin_notes:          Optional[str] = None
    tags:                 Optional[List[str]] = None


class TagsIn(BaseModel):
    tags: List[str] = Field(..., min_length=1)


# ── Opérations groupées ───────────────────────────────────

class BulkIdsIn(BaseModel):
    crew_ids: List[int] = Field(..., min_length=1, max_length=500)


class BulkStatusIn(BulkIdsIn):
    status: CrewStatus


class BulkTagsIn(BulkIdsIn):
    tags: List[str] = Field(..., min_length=1)


class BulkItemOut(BaseModel):
    id:      int
    success: bool
    reason:  Optional[str] = None


class BulkResultOut(BaseModel):
    total:      int
    successful: int
    failed:     int
    results:    List[BulkItemOut]


class BulkExportOut(BulkResultOut):
    filename: str
    content_type: Literal["text/csv"] = "text/csv"
    csv: str


# ── Statistiques ──────────────────────────────────────────

class CrewOverviewOut(BaseModel):
    total:        int = 0
    pending:      int = 0
    approved:     int = 0
    rejected:     int = 0
    missing_docs: int = 0
    urgent:       int = 0


class CountOut(BaseModel):
    value: str
    count: int


class CrewStatsOut(BaseModel):
    overview:          CrewOverviewOut
    rank_stats:        List[CountOut]
    nationality_stats: List[CountOut]
