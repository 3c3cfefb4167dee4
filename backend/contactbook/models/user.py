# contactbook/models/user.py
"""
Database model for users.
Represents an account that can log in and own contacts.
"""
import uuid
from tortoise import fields, models


class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as a salted hash (never store plain text passwords)
    - Username must be unique across all users
    - Role determines access level (user vs admin)

    Contacts reference users through a plain ``created_by`` id rather than a
    foreign key, so deleting a user leaves their contacts in place.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    username = fields.CharField(
        max_length=256,
        unique=True,
        index=True
    )  # User login name (must be unique, indexed for fast lookups)
    password_hash = fields.CharField(max_length=255)  # Argon2 hash, never plain text
    role = fields.CharField(max_length=16, default="user")  # "user" (default) or "admin"
    created_at = fields.DatetimeField(auto_now_add=True)  # Timestamp when account was created

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"
