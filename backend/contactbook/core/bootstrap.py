# contactbook/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating the default admin user on first startup.
"""
import logging

from contactbook.config import DEFAULT_ADMIN_PASSWORD, settings
from contactbook.core.policy import ROLE_ADMIN
from contactbook.core.security import hash_password, is_insecure_secret
from contactbook.models.user import User

logger = logging.getLogger("uvicorn.error")


async def ensure_default_admin() -> User | None:
    """
    If no user named ADMIN_USERNAME exists, create it with role "admin".

    Environment variables:
      ADMIN_USERNAME (default: "admin")
      ADMIN_PASSWORD (default: "admin123", a known weak default that must be rotated)

    Returns the created user, or None when the account already existed.
    """
    if await User.filter(username=settings.admin_username).exists():
        return None

    u = await User.create(
        username=settings.admin_username,
        password_hash=hash_password(settings.admin_password),  # Hash password before storing
        role=ROLE_ADMIN,
    )
    logger.warning("[bootstrap] Created default admin -> username=%s id=%s", u.username, u.id)
    if settings.admin_password == DEFAULT_ADMIN_PASSWORD:
        logger.warning("[bootstrap] Default admin uses the built-in password; change ADMIN_PASSWORD before exposing the service.")
    return u


def warn_insecure_settings() -> None:
    if is_insecure_secret():
        logger.warning("[security] JWT_SECRET not set -> signing tokens with the built-in development secret.")
