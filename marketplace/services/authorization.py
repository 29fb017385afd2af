# File: marketplace/services/authorization.py

"""
Role checks over an already-authenticated principal.

These never touch the store. A missing principal is always denied.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from marketplace.core.errors import AuthorizationError
from marketplace.models.user import Role
from marketplace.services.auth_service import Principal

_ROLE_LABELS = {
    Role.SUPPLIER: "Supplier",
    Role.BUYER: "Buyer",
}


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    message: str = ""

    def raise_for_denial(self) -> None:
        if not self.allowed:
            raise AuthorizationError(self.message)


def _denial_message(roles: list[Role]) -> str:
    labels = " or ".join(_ROLE_LABELS[r] for r in sorted(roles, key=lambda r: _ROLE_LABELS[r]))
    return f"Access denied: {labels} role required."


def require_any_role(principal: Optional[Principal], roles: Iterable[Role]) -> AccessDecision:
    permitted = list(dict.fromkeys(Role(r) for r in roles))
    if principal is None or principal.role not in {r.value for r in permitted}:
        return AccessDecision(False, _denial_message(permitted))
    return AccessDecision(True)


def require_role(principal: Optional[Principal], role: Role) -> AccessDecision:
    return require_any_role(principal, [role])
