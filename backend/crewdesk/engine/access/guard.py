# engine/access/guard.py
"""
Garde d'autorisation - vérifie qu'un Principal a le rôle attendu
avant toute logique de route.

    require(None, …)                    → Unauthenticated (401)
    require(client, PrincipalType.ADMIN) → Forbidden (403)
    require(admin, PrincipalType.CLIENT) → Forbidden (403)

require_admin_role() restreint en plus certains actes au super_admin.
"""
from typing import Optional

from crewdesk.engine.access.principal import AdminPrincipal, ClientPrincipal, Principal
from crewdesk.shared.enums import AdminRole, PrincipalType
from crewdesk.shared.errors import Forbidden, Unauthenticated

_ROLE_CLASSES = {
    PrincipalType.ADMIN:  AdminPrincipal,
    PrincipalType.CLIENT: ClientPrincipal,
}

_DENIED = {
    PrincipalType.ADMIN:  "Admin access required",
    PrincipalType.CLIENT: "Client access required",
}


def require(principal: Optional[Principal], role: PrincipalType) -> Principal:
    if principal is None:
        raise Unauthenticated()
    if not isinstance(principal, _ROLE_CLASSES[role]):
        raise Forbidden(_DENIED[role])
    return principal


def require_admin_role(principal: Optional[Principal], *roles: AdminRole) -> AdminPrincipal:
    admin = require(principal, PrincipalType.ADMIN)
    if admin.role not in roles:
        raise Forbidden("Insufficient admin role")
    return admin
