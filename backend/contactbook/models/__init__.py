# contactbook/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Account and authentication model
- Contact: Contact record owned by a user
"""
from .user import User
from .contact import Contact
