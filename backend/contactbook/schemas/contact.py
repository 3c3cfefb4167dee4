# contactbook/schemas/contact.py
"""
Pydantic schemas for contact create/update forms.

Validation runs on the submitted form fields before anything is written:
all failures of one request are collected and reported per field.
"""
import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from contactbook.config import settings
from contactbook.core.errors import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Column widths in models/contact.py
MAX_NAME = 256
MAX_EMAIL = 256
MAX_PHONE = 32


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ContactUpdateIn(BaseModel):
    """
    Partial update: only the fields present in the form are validated and
    applied. An empty optional field clears it; an empty name is rejected.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: Optional[str]) -> str:
        v = _blank_to_none(v)
        if v is None:
            raise ValueError("Name is required")
        if len(v) > MAX_NAME:
            raise ValueError(f"Name must be at most {MAX_NAME} characters")
        return v

    @field_validator("email")
    @classmethod
    def email_format(cls, v: Optional[str]) -> Optional[str]:
        v = _blank_to_none(v)
        if v is not None and len(v) > MAX_EMAIL:
            raise ValueError(f"Email must be at most {MAX_EMAIL} characters")
        if v is not None and not EMAIL_RE.match(v):
            raise ValueError("Email address is not valid")
        return v

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: Optional[str]) -> Optional[str]:
        v = _blank_to_none(v)
        if v is not None and len(v) > MAX_PHONE:
            raise ValueError(f"Phone must be at most {MAX_PHONE} characters")
        if v is not None and not re.match(settings.phone_pattern, v):
            raise ValueError("Phone must be a valid mobile number")
        return v

    @field_validator("notes")
    @classmethod
    def notes_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v


class ContactCreateIn(ContactUpdateIn):
    """New contact: name is mandatory even when the field is missing from the form."""
    name: str = Field(default="", validate_default=True)


def _field_messages(exc: PydanticValidationError) -> dict[str, str]:
    messages: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "form"
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.setdefault(field, msg)
    return messages


def parse_contact_form(model: type[ContactUpdateIn], values: dict) -> ContactUpdateIn:
    """
    Build ``model`` from form values, leaving out fields that were not sent.

    Raises:
        ValidationError: One or more fields failed validation (400)
    """
    provided = {k: v for k, v in values.items() if v is not None}
    try:
        return model(**provided)
    except PydanticValidationError as exc:
        raise ValidationError(errors=_field_messages(exc))
