# crewdesk/shared/errors.py
"""
Erreurs métier levées par l'engine et les services.

Chaque erreur porte son code HTTP ; un seul handler (main.py) les
convertit en réponse JSON {"detail": ...}. Les routers ne font pas de
try/except sur ces erreurs.
"""
from typing import List, Optional


class DomainError(Exception):
    status_code = 400
    headers: Optional[dict] = None

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail or self.__class__.__name__


# ── 401 ──────────────────────────────────────────────────────

class Unauthenticated(DomainError):
    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail)


class InvalidToken(Unauthenticated):
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(detail)


class UnrecognizedPrincipalType(Unauthenticated):
    def __init__(self, detail: str = "Invalid token type"):
        super().__init__(detail)


class InactiveOrMissingAccount(Unauthenticated):
    def __init__(self, detail: str = "Account not found or inactive"):
        super().__init__(detail)


# ── 403 ──────────────────────────────────────────────────────

class Forbidden(DomainError):
    status_code = 403

    def __init__(self, detail: str = "Access denied"):
        super().__init__(detail)


class DocumentAccessDenied(Forbidden):
    pass


# ── 400 ──────────────────────────────────────────────────────

class ValidationFailed(DomainError):
    status_code = 400

    def __init__(self, detail: str, errors: Optional[List[dict]] = None):
        super().__init__(detail)
        self.errors = errors or []


class DuplicateConflict(DomainError):
    status_code = 400


class DuplicatePendingRequest(DuplicateConflict):
    def __init__(self, detail: str = "A pending request already exists for this crew member"):
        super().__init__(detail)


# ── 404 / 409 / 503 ──────────────────────────────────────────

class NotFound(DomainError):
    status_code = 404


class InvalidTransition(DomainError):
    status_code = 409


class DownstreamUnavailable(DomainError):
    status_code = 503

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(detail)


class InvalidCredentials(DomainError):
    status_code = 400

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)
