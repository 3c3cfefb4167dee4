from fastapi import Depends, Header

from contactbook.core.errors import Forbidden
from contactbook.core.policy import Requester
from contactbook.core.security import verify_token


def bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None


async def get_requester(authorization: str | None = Header(default=None)) -> Requester:
    """
    FastAPI dependency resolving the caller from the Authorization header.

    Verification is stateless: the token's claims are trusted as-is, with no
    database lookup, so each request carries its own identity.

    Raises:
        Unauthorized (401): No bearer token (AUTH_REQUIRED)
        Forbidden (403): Token invalid or expired (AUTH_INVALID_TOKEN)

    Usage:
        @router.get("/protected")
        async def protected_route(requester: Requester = Depends(get_requester)):
            return {"user_id": requester.id}
    """
    claims = verify_token(bearer_token(authorization))
    return Requester.from_claims(claims)


async def require_admin(requester: Requester = Depends(get_requester)) -> Requester:
    """
    FastAPI dependency ensuring the caller has the admin role.

    Raises:
        Forbidden (403): Caller is not an admin (FORBIDDEN_ADMIN_ONLY)
    """
    if not requester.is_admin:
        raise Forbidden(code="FORBIDDEN_ADMIN_ONLY", message="Admin role required")
    return requester
