# contactbook/schemas/auth.py
"""
Pydantic schemas for authentication and user management endpoints.
"""
from typing import Literal, Optional
from pydantic import BaseModel


class LoginRequest(BaseModel):
    """
    Request model for user login endpoint.
    """
    username: str  # User login name
    password: str  # User password (plain text, verified against the stored hash)


class SignupIn(BaseModel):
    """
    Public self-registration. There is deliberately no role field:
    signups always create a regular user.
    """
    username: str = ""
    password: str = ""


class RegisterIn(BaseModel):
    """
    Admin-only registration with an explicit role.
    """
    username: str = ""
    password: str = ""
    role: Literal["user", "admin"] = "user"


class UserOut(BaseModel):
    """
    User information returned with a login or token verification.
    """
    id: str
    username: str
    role: str = "user"


class UserListItem(UserOut):
    """
    Row of the admin user list (never includes the password hash).
    """
    created_at: Optional[str] = None
