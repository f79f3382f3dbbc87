"""Caller identity, as forwarded by the upstream auth service.

The gateway in front of this service authenticates the user and passes
the result on as headers:

    X-User-Id       the caller's user id (required)
    X-User-Role     ``customer`` (default) or ``admin``
    X-User-Email    the caller's email, used for order confirmations
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import Depends, Header

from shopfront.errors import AuthError, ForbiddenError


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: Role = Role.CUSTOMER
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def current_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> Principal:
    if not x_user_id:
        raise AuthError("Authentication required")
    try:
        role = Role((x_user_role or Role.CUSTOMER.value).lower())
    except ValueError:
        raise AuthError(f"Unknown role {x_user_role}") from None
    return Principal(user_id=x_user_id, role=role, email=x_user_email)


def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")
    return principal
