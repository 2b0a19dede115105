# modules/auth/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from crewdesk.shared.enums import AdminRole, PrincipalType


# ── Login ─────────────────────────────────────────────────

class AdminLoginIn(BaseModel):
    """`username` accepte aussi l'email de l'admin."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ClientLoginIn(BaseModel):
    email:    EmailStr
    password: str = Field(..., min_length=1)


# ── Tokens ───────────────────────────────────────────────

class TokenOut(BaseModel):
    access_token:   str
    refresh_token:  str
    token_type:     str = "bearer"
    principal_type: PrincipalType
    account_id:     int
    display_name:   str
    admin_role:     Optional[AdminRole] = None


class RefreshIn(BaseModel):
    refresh_token: str


class AccessTokenOut(BaseModel):
    access_token: str
    token_type:   str = "bearer"


# ── Comptes ──────────────────────────────────────────────

class AdminRegisterIn(BaseModel):
    username:  str = Field(..., min_length=3, max_length=30)
    email:     EmailStr
    password:  str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)
    role:      AdminRole = AdminRole.ADMIN


class AdminOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:         int
    username:   str
    email:      EmailStr
    full_name:  str
    role:       AdminRole
    is_active:  bool
    last_login: Optional[datetime] = None


class MeOut(BaseModel):
    principal_type: PrincipalType
    id:             int
    display_name:   str
    email:          str
    admin_role:     Optional[AdminRole] = None
    company_name:   Optional[str] = None
