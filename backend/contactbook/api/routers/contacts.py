from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from contactbook.api.deps import get_requester
from contactbook.config import settings
from contactbook.core.errors import NotFound, NotFoundOrDenied
from contactbook.core.policy import Requester, can_access, can_update, resolve_scope
from contactbook.schemas.contact import ContactCreateIn, ContactUpdateIn, parse_contact_form
from contactbook.services import contacts as contact_store
from contactbook.services import users as user_store
from contactbook.services.icons import read_icon, remove_icon, store_icon

router = APIRouter(prefix="/contacts", tags=["contacts"])


def _not_found() -> NotFoundOrDenied:
    return NotFoundOrDenied(message="Contact not found")


@router.get("", response_model=list[dict])
async def list_contacts(
    search: str | None = Query(default=None, description="Case-insensitive substring of the name"),
    targetUserId: str | None = Query(default=None, description="Admin only: list this user's contacts"),
    requester: Requester = Depends(get_requester),
):
    """
    List the contacts in the caller's scope, newest first.

    The scope is the caller's own id; an admin may pass targetUserId to view
    another user's contacts instead. Non-admins' targetUserId is ignored.
    """
    owner_id = resolve_scope(requester, targetUserId)
    rows = await contact_store.search_contacts(owner_id, search)
    return [contact_store.contact_to_dict(c) for c in rows]


@router.get("/{contact_id}", response_model=dict)
async def get_contact(contact_id: str, requester: Requester = Depends(get_requester)):
    """
    Fetch one contact owned by the caller (any contact for an admin).

    Raises:
        NotFoundOrDenied (404): Missing, or owned by someone else
    """
    c = await contact_store.get_contact(contact_id)
    if not c or not can_access(requester, c.created_by):
        raise _not_found()
    return contact_store.contact_to_dict(c)


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_contact(
    name: str | None = Form(default=None),
    email: str | None = Form(default=None),
    phone: str | None = Form(default=None),
    notes: str | None = Form(default=None),
    targetUserId: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
    requester: Requester = Depends(get_requester),
):
    """
    Create a contact from a multipart form.

    The owner is the caller, or targetUserId when the caller is an admin.
    Fields and icon are validated before anything is written; if saving the
    row fails, the icon file written for it is removed again.

    Raises:
        ValidationError (400): Bad name/email/phone or malformed targetUserId
        NotFound (404): Owner account doesn't exist (USER_NOT_FOUND)
        PayloadTooLarge (413) / UnsupportedMediaType (415): Icon rejected
    """
    fields = parse_contact_form(ContactCreateIn, {"name": name, "email": email, "phone": phone, "notes": notes})
    owner_id = resolve_scope(requester, targetUserId)
    if not await user_store.get_user(owner_id):
        raise NotFound(code="USER_NOT_FOUND", message="Owner account not found")

    upload = await read_icon(icon, settings.max_icon_bytes)
    icon_ref = await run_in_threadpool(store_icon, upload, settings.upload_dir) if upload else None
    try:
        c = await contact_store.create_contact(owner_id, fields.model_dump(), icon_ref)
    except Exception:
        await run_in_threadpool(remove_icon, icon_ref, settings.upload_dir)
        raise
    return contact_store.contact_to_dict(c)


@router.put("/{contact_id}", response_model=dict)
async def update_contact(
    contact_id: str,
    name: str | None = Form(default=None),
    email: str | None = Form(default=None),
    phone: str | None = Form(default=None),
    notes: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
    requester: Requester = Depends(get_requester),
):
    """
    Partially update a contact. Omitted fields keep their values; an empty
    optional field clears it. Ownership can't change.

    Unless STRICT_UPDATE_OWNERSHIP is enabled, any authenticated caller may
    update any contact by id (unlike reads and deletes).

    A new icon replaces the old one and the old file is removed once the
    row is saved.

    Raises:
        ValidationError (400): Bad name/email/phone
        NotFoundOrDenied (404): Missing contact (or not permitted in strict mode)
        PayloadTooLarge (413) / UnsupportedMediaType (415): Icon rejected
    """
    changes = parse_contact_form(
        ContactUpdateIn, {"name": name, "email": email, "phone": phone, "notes": notes}
    ).model_dump(exclude_unset=True)
    c = await contact_store.get_contact(contact_id)
    if not c or not can_update(requester, c.created_by, settings.strict_update_ownership):
        raise _not_found()

    upload = await read_icon(icon, settings.max_icon_bytes)
    icon_ref = await run_in_threadpool(store_icon, upload, settings.upload_dir) if upload else None
    try:
        c, previous_icon = await contact_store.update_contact(c, changes, icon_ref)
    except Exception:
        await run_in_threadpool(remove_icon, icon_ref, settings.upload_dir)
        raise
    if previous_icon and previous_icon != icon_ref:
        await run_in_threadpool(remove_icon, previous_icon, settings.upload_dir)
    return {"success": True, "contact": contact_store.contact_to_dict(c)}


@router.delete("/{contact_id}", response_model=dict)
async def delete_contact(contact_id: str, requester: Requester = Depends(get_requester)):
    """
    Delete a contact owned by the caller (any contact for an admin) and
    release its icon file. A missing icon file doesn't fail the request.

    Raises:
        NotFoundOrDenied (404): Missing, or owned by someone else
    """
    c = await contact_store.get_contact(contact_id)
    if not c or not can_access(requester, c.created_by):
        raise _not_found()
    removed = contact_store.contact_to_dict(c)
    icon_ref = await contact_store.delete_contact(c)
    await run_in_threadpool(remove_icon, icon_ref, settings.upload_dir)
    return {"success": True, "removed": removed}
