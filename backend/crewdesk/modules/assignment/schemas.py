# modules/assignment/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class AssignmentOut(BaseModel):
    crew_id:   int
    client_id: int
    assigned:  bool
    changed:   bool    # False si l'état était déjà celui demandé


class BulkAssignIn(BaseModel):
    client_id: int
    crew_ids:  List[int] = Field(..., min_length=1, max_length=500)


class AssignedClientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:             int
    company_name:   str
    contact_person: str
    email:          str
    is_active:      bool
    created_at:     Optional[datetime] = None


class ShortlistOut(BaseModel):
    crew_id:     int
    shortlisted: bool
    message:     str
