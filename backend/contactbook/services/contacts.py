# contactbook/services/contacts.py
"""
Contact store: owner-scoped persistence for contact records.

Authorization is decided by the caller (see core/policy.py); this module
only reads and writes rows.
"""
import logging
from typing import Optional

from contactbook.core.policy import normalize_id
from contactbook.models.contact import Contact

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "email", "phone", "notes")


def contact_to_dict(c: Contact) -> dict:
    return {
        "id": str(c.id),
        "name": c.name,
        "email": c.email,
        "phone": c.phone,
        "notes": c.notes,
        "icon": c.icon,
        "created_by": str(c.created_by),
        "created_at": c.created_at.isoformat() if c.created_at else None,
        "updated_at": c.updated_at.isoformat() if c.updated_at else None,
    }


async def create_contact(owner_id: str, fields: dict, icon_ref: Optional[str] = None) -> Contact:
    values = {k: fields.get(k) for k in EDITABLE_FIELDS}
    return await Contact.create(created_by=owner_id, icon=icon_ref, **values)


async def search_contacts(owner_id: str, search: Optional[str] = None) -> list[Contact]:
    """
    Contacts owned by ``owner_id``, newest first, optionally narrowed to
    names containing ``search`` (case-insensitive).
    """
    qs = Contact.filter(created_by=owner_id)
    if search and search.strip():
        qs = qs.filter(name__icontains=search.strip())
    return await qs.order_by("-created_at")


async def get_contact(contact_id: str) -> Optional[Contact]:
    cid = normalize_id(contact_id)
    if cid is None:
        return None
    return await Contact.get_or_none(id=cid)


async def update_contact(contact: Contact, changes: dict,
                         icon_ref: Optional[str] = None) -> tuple[Contact, Optional[str]]:
    """
    Merge ``changes`` into ``contact``. Fields not present keep their value;
    ``created_by`` is never touched. ``updated_at`` advances on every save.

    Returns the saved contact and the icon reference it held before, if a
    new icon replaced it.
    """
    for key in EDITABLE_FIELDS:
        if key in changes:
            setattr(contact, key, changes[key])
    previous_icon = None
    if icon_ref is not None:
        previous_icon = contact.icon
        contact.icon = icon_ref
    await contact.save()
    return contact, previous_icon


async def delete_contact(contact: Contact) -> Optional[str]:
    """Delete the row and hand back its icon reference for file cleanup."""
    icon_ref = contact.icon
    await contact.delete()
    logger.info("[contacts] deleted contact id=%s owner=%s", contact.id, contact.created_by)
    return icon_ref
