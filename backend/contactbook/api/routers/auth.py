from fastapi import APIRouter, Depends, status

from contactbook.api.deps import get_requester, require_admin
from contactbook.core.errors import Unauthorized
from contactbook.core.policy import ROLE_USER, Requester
from contactbook.core.security import create_access_token
from contactbook.schemas.auth import LoginRequest, RegisterIn, SignupIn
from contactbook.services import users as user_store

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(body: SignupIn):
    """
    Public self-registration.

    The role is always "user"; there is no way to request another one here.

    Returns:
        dict: {"success": True, "message": ...}

    Error codes:
        - VALIDATION_ERROR (400): Missing username or password
        - USERNAME_EXISTS (409): Username already taken
    """
    await user_store.create_user(body.username, body.password, ROLE_USER)
    return {"success": True, "message": "Account created, please log in"}


@router.post("/login")
async def login(payload: LoginRequest):
    """
    Authenticate user and issue a 24h session token.

    Returns:
        dict: {"success": True, "token": str, "user": {id, username, role}}

    Raises:
        Unauthorized (401): If credentials are invalid
    """
    user = await user_store.authenticate(payload.username, payload.password)
    if not user:
        raise Unauthorized(code="AUTH_INVALID_CREDENTIALS", message="Incorrect username or password")
    token = create_access_token(str(user.id), user.username, user.role)
    return {"success": True, "token": token,
            "user": {"id": str(user.id), "username": user.username, "role": user.role}}


@router.get("/verify")
async def verify(requester: Requester = Depends(get_requester)):
    """
    Return the identity carried by the bearer token.

    Raises:
        Unauthorized (401): No token supplied
        Forbidden (403): Token invalid or expired
    """
    return {"success": True,
            "user": {"id": requester.id, "username": requester.username, "role": requester.role}}


@router.post("/logout")
async def logout():
    """
    Acknowledge a logout.

    Tokens are self-contained and there is no revocation list: the client
    discards its token, which otherwise stays valid until it expires.
    """
    return {"success": True}


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def register(body: RegisterIn):
    """
    Create an account with an explicit role (admin only).

    Error codes:
        - VALIDATION_ERROR (400): Missing username/password or unknown role
        - USERNAME_EXISTS (409): Username already taken
        - FORBIDDEN_ADMIN_ONLY (403): Caller is not an admin
    """
    u = await user_store.create_user(body.username, body.password, body.role)
    return {"success": True, "user": user_store.user_to_dict(u)}
