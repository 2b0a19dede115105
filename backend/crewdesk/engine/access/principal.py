# engine/access/principal.py
"""
Identité & Session - résolution d'un jeton porteur en Principal.

Un Principal est l'une de deux variantes, jamais les deux :
    AdminPrincipal  : {id, role ∈ super_admin|admin|moderator, is_active}
    ClientPrincipal : {id, is_active}

Étapes (pures, sans I/O - la lecture du compte est faite par l'appelant) :

    1. read_claims(token)
           signature / expiration / forme invalides → InvalidToken
           claim "type" ≠ "access"                 → InvalidToken
           claim "role" ∉ {"admin", "client"}       → UnrecognizedPrincipalType
           → TokenClaims(principal_type, account_id)

    2. to_principal(claims, account)
           compte absent ou is_active == False      → InactiveOrMissingAccount
           → AdminPrincipal | ClientPrincipal

Toutes ces erreurs sont des Unauthenticated (401). Le même jeton résolu deux
fois sur un état de compte identique donne le même Principal.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from jose import JWTError

from crewdesk.core.security import decode_token
from crewdesk.shared.enums import AdminRole, PrincipalType
from crewdesk.shared.errors import (
    InactiveOrMissingAccount, InvalidToken, UnrecognizedPrincipalType,
)


@dataclass(frozen=True)
class AdminPrincipal:
    id: int
    role: AdminRole
    is_active: bool = True

    @property
    def principal_type(self) -> PrincipalType:
        return PrincipalType.ADMIN


@dataclass(frozen=True)
class ClientPrincipal:
    id: int
    is_active: bool = True

    @property
    def principal_type(self) -> PrincipalType:
        return PrincipalType.CLIENT


Principal = Union[AdminPrincipal, ClientPrincipal]


@dataclass(frozen=True)
class TokenClaims:
    principal_type: PrincipalType
    account_id: int


def read_claims(token: str, expected_type: str = "access") -> TokenClaims:
    try:
        payload = decode_token(token)
    except JWTError:
        raise InvalidToken()

    if payload.get("type") != expected_type:
        raise InvalidToken()

    sub = payload.get("sub")
    try:
        account_id = int(sub)
    except (TypeError, ValueError):
        raise InvalidToken()

    role = payload.get("role")
    try:
        principal_type = PrincipalType(role)
    except ValueError:
        raise UnrecognizedPrincipalType()

    return TokenClaims(principal_type=principal_type, account_id=account_id)


def to_principal(claims: TokenClaims, account: Optional[object]) -> Principal:
    """`account` est un Admin ou un Client ORM (ou tout objet équivalent)."""
    if account is None or not getattr(account, "is_active", False):
        raise InactiveOrMissingAccount()

    if claims.principal_type == PrincipalType.ADMIN:
        return AdminPrincipal(
            id=account.id,
            role=AdminRole(account.role),
            is_active=account.is_active,
        )
    return ClientPrincipal(id=account.id, is_active=account.is_active)
