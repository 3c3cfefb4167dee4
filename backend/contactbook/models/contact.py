# contactbook/models/contact.py
"""
Database model for contacts.
Each contact belongs to exactly one owner (the user who created it, or the
user an admin created it for).
"""
import uuid
from tortoise import fields, models


class Contact(models.Model):
    """
    Contact database model.

    ``created_by`` is set once at creation and never changed. It is indexed
    because every list query is scoped by owner.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=256)
    email = fields.CharField(max_length=256, null=True)
    phone = fields.CharField(max_length=32, null=True)
    notes = fields.TextField(null=True)
    icon = fields.CharField(max_length=512, null=True)  # URL path under /uploads, e.g. /uploads/1700000000000-me.png
    created_by = fields.UUIDField(index=True)  # Owner user id (not a foreign key: contacts outlive deleted users)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "contacts"
