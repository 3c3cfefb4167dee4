# contactbook/core/security.py
"""
Security module for authentication.
Handles password hashing and JWT session token issuing/verification.
"""
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext

from contactbook.config import settings
from contactbook.core.errors import Forbidden, Unauthorized

# Password hashing context
# Argon2 is a modern, salted, memory-hard password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

# JWT configuration
JWT_SECRET = settings.jwt_secret  # Secret key for JWT signing (use strong secret in production)
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes  # 24 hours by default
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)
INSECURE_DEFAULT_SECRET = "dev-secret"

REQUIRED_CLAIMS = ("sub", "username", "role", "exp")


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.
    """
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: str, username: str, role: str) -> str:
    """
    Create a signed session token.

    The token carries everything the API needs to authorize a request
    (id, username, role), so verification needs no database lookup.

    Token payload includes:
        - sub: Subject (user ID)
        - username: Login name
        - role: "user" or "admin"
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "iat": now,
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(
        token,
        JWT_SECRET,
        algorithms=[JWT_ALG],
        options={"require": list(REQUIRED_CLAIMS)},
    )


def verify_token(token: str | None) -> dict:
    """
    Verify a session token and return its claims.

    Raises:
        Unauthorized: No token was supplied ("missing")
        Forbidden: Token signature, expiry or claims are invalid ("invalid_or_expired")
    """
    if not token:
        raise Unauthorized()
    try:
        claims = decode_access_token(token)
    except jwt.PyJWTError:
        raise Forbidden()
    if claims.get("role") not in ("user", "admin"):
        raise Forbidden()
    return claims


def is_insecure_secret() -> bool:
    return JWT_SECRET == INSECURE_DEFAULT_SECRET
