# contactbook/core/policy.py
"""
Authorization policy for contact and user operations.

Every decision is a pure function of the request-scoped ``Requester`` (built
from verified token claims) and the owner id of the target record. Admin
impersonation happens only through ``resolve_scope``; routes never branch on
role themselves.
"""
import uuid
from dataclasses import dataclass

from contactbook.core.errors import ValidationError

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


@dataclass(frozen=True)
class Requester:
    """Identity of the caller for the current request."""
    id: str
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_claims(cls, claims: dict) -> "Requester":
        return cls(id=str(claims["sub"]), username=claims["username"], role=claims["role"])


def normalize_id(raw: str) -> str | None:
    """Canonical string form of a UUID, or None if ``raw`` isn't one."""
    try:
        return str(uuid.UUID(str(raw).strip()))
    except (ValueError, AttributeError):
        return None


def resolve_scope(requester: Requester, target_user_id: str | None = None) -> str:
    """
    Decide which owner id a contact operation applies to.

    Admins may pass ``target_user_id`` to act on another user's contacts;
    for everyone else the parameter is ignored and the scope is their own id.

    Raises:
        ValidationError: An admin supplied a target id that isn't a valid id
    """
    if requester.is_admin and target_user_id:
        target = normalize_id(target_user_id)
        if target is None:
            raise ValidationError(errors={"targetUserId": "targetUserId is not a valid user id"})
        return target
    return requester.id


def can_access(requester: Requester, owner_id) -> bool:
    """Owner-or-admin predicate, used for reading a single record and deleting."""
    return requester.is_admin or str(owner_id) == requester.id


def can_update(requester: Requester, owner_id, strict: bool = False) -> bool:
    """
    Update permission.

    Non-strict mode lets any authenticated caller update any contact, which
    is the long-standing behavior clients rely on. Strict mode applies the
    same owner-or-admin rule as delete.
    """
    if not strict:
        return True
    return can_access(requester, owner_id)
