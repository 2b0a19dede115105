# modules/reminders/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from crewdesk.engine.policy.tags import normalize_tags
from crewdesk.shared.enums import ReminderPriority, ReminderStatus


class ReminderCreateIn(BaseModel):
    title:          str = Field(..., min_length=1, max_length=200)
    description:    Optional[str] = None
    crew_id:        Optional[int] = None
    client_id:      Optional[int] = None
    priority:       ReminderPriority = ReminderPriority.MEDIUM
    due_date:       datetime
    assigned_to_id: Optional[int] = None
    tags:           List[str] = []
    notes:          Optional[str] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)


class ReminderUpdateIn(BaseModel):
    """Champs seulement : le statut passe par /complete et /cancel."""
    title:          Optional[str] = Field(None, min_length=1, max_length=200)
    description:    Optional[str] = None
    crew_id:        Optional[int] = None
    client_id:      Optional[int] = None
    priority:       Optional[ReminderPriority] = None
    due_date:       Optional[datetime] = None
    assigned_to_id: Optional[int] = None
    tags:           Optional[List[str]] = None
    notes:          Optional[str] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return normalize_tags(v) if v is not None else None


class ReminderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:              int
    title:           str
    description:     Optional[str] = None
    crew_id:         Optional[int] = None
    client_id:       Optional[int] = None
    priority:        ReminderPriority
    due_date:        datetime
    status:          ReminderStatus
    created_by_id:   Optional[int] = None
    assigned_to_id:  Optional[int] = None
    tags:            List[str] = []
    notes:           Optional[str] = None
    completed_at:    Optional[datetime] = None
    completed_by_id: Optional[int] = None
    created_at:      Optional[datetime] = None
    is_overdue:      bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []
