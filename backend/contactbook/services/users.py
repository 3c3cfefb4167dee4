# contactbook/services/users.py
"""
Credential store: user accounts and password verification.
"""
import logging

from tortoise.exceptions import IntegrityError

from contactbook.core.errors import Conflict, InvalidOperation, NotFound, ValidationError
from contactbook.core.policy import ROLES, ROLE_USER, normalize_id
from contactbook.core.security import hash_password, verify_password
from contactbook.models.user import User

logger = logging.getLogger(__name__)

MAX_USERNAME_CHARS = 256


def user_to_dict(u: User) -> dict:
    """Public view of a user; the password hash never leaves this module."""
    return {
        "id": str(u.id),
        "username": u.username,
        "role": u.role,
        "created_at": u.created_at.isoformat() if u.created_at else None,
    }


async def create_user(username: str, password: str, role: str = ROLE_USER) -> User:
    """
    Create an account, storing only the Argon2 hash of ``password``.

    Raises:
        ValidationError: Missing username/password or unknown role
        Conflict: Username already taken
    """
    username = (username or "").strip()
    errors = {}
    if not username:
        errors["username"] = "Username is required"
    elif len(username) > MAX_USERNAME_CHARS:
        errors["username"] = f"Username must be at most {MAX_USERNAME_CHARS} characters"
    if not password:
        errors["password"] = "Password is required"
    if role not in ROLES:
        errors["role"] = "Role must be 'user' or 'admin'"
    if errors:
        raise ValidationError(errors=errors)

    if await User.filter(username=username).exists():
        raise Conflict(code="USERNAME_EXISTS", message="Username already exists")
    try:
        u = await User.create(username=username, password_hash=hash_password(password), role=role)
    except IntegrityError:
        # Lost a race with a concurrent signup for the same name
        raise Conflict(code="USERNAME_EXISTS", message="Username already exists")
    logger.info("[users] created user username=%s role=%s id=%s", u.username, u.role, u.id)
    return u


async def find_by_username(username: str) -> User | None:
    # Stored names are stripped on creation, so lookups strip too
    return await User.get_or_none(username=(username or "").strip())


async def get_user(user_id: str) -> User | None:
    uid = normalize_id(user_id)
    if uid is None:
        return None
    return await User.get_or_none(id=uid)


async def authenticate(username: str, password: str) -> User | None:
    """Return the user when the credentials match, otherwise None."""
    user = await find_by_username(username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


async def list_users() -> list[User]:
    return await User.all().order_by("created_at")


async def delete_user(user_id: str, acting_user_id: str) -> None:
    """
    Delete an account. Contacts owned by the user are left in place.

    Raises:
        InvalidOperation: An admin tried to delete their own account
        NotFound: No such user
    """
    uid = normalize_id(user_id)
    if uid is not None and uid == acting_user_id:
        raise InvalidOperation(code="CANNOT_DELETE_SELF", message="Cannot delete yourself")
    u = await get_user(user_id)
    if not u:
        raise NotFound(code="USER_NOT_FOUND", message="User not found")
    await u.delete()
    logger.info("[users] deleted user username=%s id=%s by=%s", u.username, uid, acting_user_id)
